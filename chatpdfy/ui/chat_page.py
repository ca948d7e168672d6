"""NiceGUI chat interface over the shared chat session."""

import asyncio
import logging

from nicegui import events, ui

from chatpdfy.chat.session import get_chat_session
from chatpdfy.models.schemas import UploadedFile
from chatpdfy.parsing.pdf_parser import PdfBackendUnavailableError
from chatpdfy.ui.presenter import PENDING_PLACEHOLDER, TurnView, present

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .message-user {
        background: #bfdbfe;
        color: black;
        border-radius: 16px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 16px;
    }

    .file-icon { background: #fee2e2; color: #dc2626; }

    .pending { color: #3b82f6; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = get_chat_session()

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        icon = "person" if is_user else "smart_toy"
        color = "bg-blue-100 text-blue-700" if is_user else "bg-gray-200 text-gray-600"
        with ui.element("div").classes(
            f"w-8 h-8 rounded-full flex items-center justify-center {color}"
        ):
            ui.icon(icon).classes("text-lg")

    def render_file_card(view: TurnView) -> None:
        with ui.row().classes("items-center gap-3 no-wrap"):
            with ui.element("div").classes(
                "file-icon w-12 h-12 rounded flex items-center justify-center"
            ):
                ui.icon("description").classes("text-2xl")
            with ui.column().classes("gap-0"):
                ui.label(view.file_title).classes("font-semibold")
                ui.label(view.file_details).classes("text-xs text-gray-500")

    def render_message(view: TurnView) -> None:
        align = "flex-row-reverse" if view.is_user else ""
        bubble = "message-user ml-auto" if view.is_user else "message-assistant mr-auto"

        with ui.row().classes(f"w-full items-start gap-3 no-wrap {align}"):
            render_avatar(view.is_user)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-2 text-sm {bubble}"):
                    if view.is_file:
                        render_file_card(view)
                    elif view.is_user:
                        ui.label(view.text)
                    else:
                        ui.markdown(view.text)
                ui.label(view.time_label).classes(
                    f"text-[10px] text-gray-400 {'self-end' if view.is_user else 'self-start'}"
                )

    def render_pending() -> None:
        with ui.row().classes("w-full items-start gap-3 no-wrap"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant pending px-4 py-2 text-sm"):
                ui.label(PENDING_PLACEHOLDER)

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            views = present(session.turns)
            if not views and not session.awaiting_reply:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            for view in views:
                render_message(view)
            if session.awaiting_reply:
                render_pending()
        if session.awaiting_reply:
            send_btn.disable()
        else:
            send_btn.enable()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.awaiting_reply:
            return

        input_field.value = ""
        task = asyncio.create_task(session.send(text))
        # One loop tick is enough for the send to record the user turn.
        await asyncio.sleep(0)
        refresh_messages()
        try:
            await task
        finally:
            refresh_messages()

    async def handle_upload(e: events.MultiUploadEventArguments) -> None:
        uploads = [UploadedFile(name=file.name, content=await file.read()) for file in e.files]
        try:
            batch = await session.upload(uploads)
        except PdfBackendUnavailableError as exc:
            logger.error(f"Upload refused: {exc}")
            ui.notify("PDF support is not loaded yet", type="negative")
            return
        finally:
            uploader.reset()

        for failure in batch.failures:
            ui.notify(f"Could not read {failure.name}: {failure.reason}", type="warning")
        refresh_messages()

    def clear_chat() -> None:
        session.clear()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-2 md:p-4"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 2rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full border-b px-5 py-2 items-center justify-between"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("smart_toy").classes("text-xl")
                ui.label("ChatPDFy").classes("font-semibold")
            with ui.button(icon="delete", on_click=clear_chat).props("flat round"):
                ui.tooltip("Clear conversation")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-white"),
            ui.column().classes("w-full max-w-3xl mx-auto p-3"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.row().classes("w-full max-w-3xl mx-auto p-3 gap-2 items-center no-wrap"):
            uploader = (
                ui.upload(multiple=True, auto_upload=True, on_multi_upload=handle_upload)
                .props('accept="application/pdf" flat dense')
                .classes("w-32")
            )
            input_field = (
                ui.textarea(placeholder="Type a message…")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button("Send", icon="send", on_click=send_message).props("unelevated")

        refresh_messages()
