"""Ordered in-memory transcript of user and assistant turns."""

from collections.abc import Iterator

from src.models.schemas import TranscriptEntry


class Transcript:
    """Transcript entries in creation order.

    Entries are never removed one by one; `clear()` drops them all.
    """

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: TranscriptEntry) -> None:
        self._entries.append(entry)

    def get(self, entry_id: str) -> TranscriptEntry | None:
        return next((e for e in self._entries if e.id == entry_id), None)

    def update(
        self,
        entry_id: str,
        content: str | None = None,
        in_progress: bool | None = None,
    ) -> bool:
        """Update an entry in place.

        Returns:
            False if the entry no longer exists (e.g. after a reset).
        """
        entry = self.get(entry_id)
        if entry is None:
            return False
        if content is not None:
            entry.content = content
        if in_progress is not None:
            entry.in_progress = in_progress
        return True

    def in_progress(self) -> TranscriptEntry | None:
        """The assistant entry still waiting for its first token, if any."""
        return next((e for e in self._entries if e.in_progress), None)

    def clear(self) -> None:
        self._entries.clear()
