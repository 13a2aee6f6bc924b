"""NiceGUI chat interface with attachment sidebar and SSE streaming."""

import json
import os
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from nicegui import events, ui

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CUSTOM_CSS = """
<style>
    body { background: #f8fafc; }
    .sidebar { background: #0f172a; color: #e2e8f0; }
    .message-user { background: #1e3a8a; color: white; border-radius: 16px 16px 4px 16px; }
    .message-assistant { background: white; color: #1f2937; border: 1px solid #e2e8f0;
                         border-radius: 16px 16px 16px 4px; }
    .file-chip { background: #1e293b; border-radius: 8px; }
    .file-chip.sent { opacity: 0.5; }
</style>
"""

STATUS_LABELS = {
    "idle": "",
    "awaiting-first-token": "Thinking...",
    "receiving": "Drafting response...",
    "failed": "Last request failed",
}


async def fetch_session() -> dict[str, Any]:
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=30.0) as client:
        response = await client.get("/chat/session")
        response.raise_for_status()
        return response.json()


async def stream_chat_response(
    message: str,
    on_chunk: Callable[[dict[str, Any]], Awaitable[None]],
    on_error: Callable[[str], None],
) -> None:
    """Consume SSE stream from /chat/stream endpoint.

    Each event carries the full reply so far, so `on_chunk` replaces rather
    than appends.
    """
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=300.0) as client:
        try:
            async with client.stream(
                "POST",
                "/chat/stream",
                json={"message": message},
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    on_error(response.json().get("detail", f"HTTP {response.status_code}"))
                    return
                async for line in response.aiter_lines():
                    if line.startswith("data: "):
                        await on_chunk(json.loads(line[6:]))
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")


@ui.page("/")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    state: dict[str, Any] = {"status": "idle", "transcript": [], "attachments": []}

    @ui.refreshable
    def attachment_list() -> None:
        if not state["attachments"]:
            ui.label("No documents attached").classes("text-xs text-slate-400")
        for item in state["attachments"]:
            sent = "sent" if item["delivered"] else ""
            with ui.row().classes(f"file-chip {sent} w-full px-3 py-2 items-center no-wrap"):
                ui.icon("description").classes("text-slate-300")
                with ui.column().classes("gap-0 flex-grow min-w-0"):
                    ui.label(item["name"]).classes("text-sm truncate")
                    ui.label(f"{item['size'] / 1024:.1f} KB").classes("text-[10px] text-slate-400")
                ui.button(
                    icon="close", on_click=lambda _, i=item["id"]: remove_attachment(i)
                ).props("flat round dense size=sm color=white")

    @ui.refreshable
    def transcript() -> None:
        if not state["transcript"]:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("gavel").classes("text-5xl text-slate-300")
                ui.label("Upload a document or ask a legal question").classes("text-slate-400")
            return
        for entry in state["transcript"]:
            is_user = entry["role"] == "user"
            align = "justify-end" if is_user else "justify-start"
            with ui.row().classes(f"w-full {align}"):
                with ui.column().classes("max-w-[75%] gap-1"):
                    bubble = "message-user" if is_user else "message-assistant"
                    with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                        if is_user:
                            ui.label(entry["content"]).classes("text-sm whitespace-pre-wrap")
                            for attached in entry["attachments"]:
                                ui.label(f"📎 {attached['name']}").classes("text-xs opacity-80")
                        elif entry["in_progress"]:
                            ui.spinner("dots")
                        else:
                            ui.markdown(entry["content"]).classes("text-sm")

    async def refresh() -> None:
        state.update(await fetch_session())
        attachment_list.refresh()
        transcript.refresh()
        status_label.set_text(STATUS_LABELS.get(state["status"], ""))

    async def handle_upload(e: events.UploadEventArguments) -> None:
        files = {"files": (e.name, e.content.read(), e.type or "application/octet-stream")}
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=120.0) as client:
            response = await client.post("/attachments", files=files)
        if response.is_success:
            for rejection in response.json()["rejections"]:
                ui.notify(rejection["reason"], type="negative")
        else:
            ui.notify(f"Upload failed: HTTP {response.status_code}", type="negative")
        await refresh()

    async def remove_attachment(attachment_id: str) -> None:
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=30.0) as client:
            await client.delete(f"/attachments/{attachment_id}")
        await refresh()

    async def reset_session() -> None:
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=30.0) as client:
            await client.post("/chat/reset")
        input_field.value = ""
        await refresh()

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if state["status"] in ("awaiting-first-token", "receiving"):
            return
        if not text and all(a["delivered"] for a in state["attachments"]):
            return

        input_field.value = ""
        send_btn.disable()

        async def on_chunk(chunk: dict[str, Any]) -> None:
            if chunk["status"] == "awaiting-first-token":
                # Server has created the user entry and the reply placeholder.
                await refresh()
                return
            status_label.set_text(STATUS_LABELS.get(chunk["status"], ""))
            last = state["transcript"][-1] if state["transcript"] else None
            if last is not None and last["role"] == "assistant":
                last["content"] = chunk["content"]
                last["in_progress"] = False
                transcript.refresh()

        def on_error(error: str) -> None:
            ui.notify(error, type="negative")

        await stream_chat_response(text, on_chunk, on_error)
        send_btn.enable()
        await refresh()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("sidebar w-72 h-full p-4 gap-4"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("balance").classes("text-2xl")
                ui.label("LexAI").classes("text-lg font-semibold")
            ui.upload(
                label="Add documents", multiple=True, auto_upload=True, on_upload=handle_upload
            ).props('accept=".pdf,.txt,.docx,.xls,.xlsx" flat dark').classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                attachment_list()
            ui.button("New consultation", icon="restart_alt", on_click=reset_session).props(
                "outline color=white"
            ).classes("w-full")

        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.scroll_area().classes("flex-grow w-full p-6"):
                transcript()
            status_label = ui.label("").classes("px-6 text-xs text-slate-500 italic")
            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t no-wrap"):
                input_field = (
                    ui.textarea(placeholder="Ask about your documents or Indian law...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    await refresh()
