"""NiceGUI chat interface with client-side incremental reveal."""

import logging

from nicegui import events, ui

from src.agent.gemini_client import SharedGeminiClient
from src.models.schemas import Message, Role
from src.parsing.images import ImageAttachmentError
from src.ui.capabilities import BrowserClipboard
from src.ui.config import get_view_config
from src.ui.rendering import render_content
from src.ui.session import ChatSession

logger = logging.getLogger(__name__)

APP_TITLE = "Aura Chat"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #111827; color: #f9fafb; min-height: 100vh; }

    .app-container { background: #111827; }

    .header { border-bottom: 1px solid #1f2937; }
    .header .title { color: #c084fc; }

    .message-author { color: #e5e7eb; font-weight: 500; }
    .message-body { color: #d1d5db; }
    .message-error { color: #fca5a5; }

    .avatar-user { background: #1e3a8a; color: #93c5fd; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #a855f7;
        border-radius: 50%;
        animation: pulse 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.15s; }
    .typing-dot:nth-child(3) { animation-delay: 0.3s; }

    @keyframes pulse {
        0%, 60%, 100% { opacity: 1; }
        30% { opacity: 0.3; }
    }

    .input-box {
        background: #1f2937;
        border: 1px solid #374151;
        border-radius: 9999px;
    }
    .input-box:focus-within { border-color: #a855f7; }

    .send-btn { background: #9333ea !important; }

    .code-header { background: #1f2937; color: #e5e7eb; }

    .chat-table { border: 1px solid #374151; border-collapse: collapse; }
    .chat-table thead { background: #1f2937; }
    .chat-table .row-even { background: #111827; }
    .chat-table .row-odd { background: #1f2937; }
    .message-body strong { font-weight: 600; }
    .message-body em { font-style: italic; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    view_config = get_view_config()
    session = ChatSession(SharedGeminiClient(), view_config)
    clipboard = BrowserClipboard()
    bodies: dict[str, ui.column] = {}

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button
    preview_row: ui.row
    upload: ui.upload

    def render_body(message: Message) -> None:
        container = bodies[message.id]
        container.clear()
        with container:
            if message.image:
                ui.image(message.image).classes("max-w-xs rounded-lg mb-3")
            if message.is_error:
                ui.label(message.content).classes("message-error")
            else:
                render_content(message.content)

    def copy_message(message_id: str) -> None:
        message = session.transcript.get(message_id)
        if message is not None and session.copy_message(message, clipboard):
            ui.notify("Copied to clipboard", type="positive")

    def render_message(message: Message) -> None:
        is_user = message.role is Role.USER
        with ui.row().classes("w-full gap-3 no-wrap"):
            if is_user:
                with ui.element("div").classes(
                    "w-7 h-7 rounded-full flex items-center justify-center avatar-user"
                ):
                    ui.icon("person").classes("text-sm")
            with ui.column().classes("flex-1 gap-1 min-w-0"):
                ui.label("You" if is_user else APP_TITLE).classes("message-author")
                bodies[message.id] = ui.column().classes("w-full gap-0 message-body")
                render_body(message)
                if not is_user and not message.is_error:
                    with ui.row().classes("gap-2 items-center"):
                        ui.button(
                            icon="content_copy",
                            on_click=lambda _, mid=message.id: copy_message(mid),
                        ).props("flat round dense size=sm color=grey")
                        for source in message.sources:
                            ui.link(source.title, source.url, new_tab=True).classes(
                                "text-xs text-blue-400"
                            )

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full gap-3 items-center"):
            ui.label(APP_TITLE).classes("message-author")
            with ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")
            ui.label("Searching for answers...").classes("text-sm text-gray-400")

    def refresh_messages() -> None:
        messages_container.clear()
        bodies.clear()
        with messages_container:
            if not len(session.transcript):
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.label(f"Welcome To {APP_TITLE}").classes("text-3xl font-bold")
                    ui.label(
                        "Your AI-powered assistant for instant answers. Ask anything!"
                    ).classes("text-gray-400")
            else:
                for message in session.transcript:
                    render_message(message)
                if session.is_loading:
                    render_typing_indicator()

    def on_transcript_change(message: Message) -> None:
        if message.id in bodies:
            render_body(message)
        else:
            refresh_messages()

    session.transcript.subscribe(on_transcript_change)

    def on_scroll(e: events.ScrollEventArguments) -> None:
        session.scroll.observe_viewport(
            e.vertical_position, e.vertical_size, e.vertical_container_size
        )

    def flush_scroll() -> None:
        if session.scroll.take_request():
            scroll_area.scroll_to(percent=1.0, duration=view_config.scroll_duration)

    def refresh_preview() -> None:
        preview_row.clear()
        with preview_row:
            if session.attachment.preview:
                ui.image(session.attachment.preview).classes("w-6 h-6 rounded")
                ui.button(icon="close", on_click=remove_image).props(
                    "flat round dense size=xs color=grey"
                )

    def remove_image() -> None:
        session.attachment.clear()
        upload.reset()
        refresh_preview()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        try:
            session.attachment.attach(content, e.file.content_type, name=e.file.name)
        except ImageAttachmentError as err:
            logger.warning(f"Rejected upload {e.file.name}: {err}")
            ui.notify(str(err), type="negative")
        e.sender.reset()
        refresh_preview()

    async def send_message() -> None:
        text = input_field.value or ""
        if not session.can_submit(text):
            return

        input_field.value = ""
        send_btn.disable()
        try:
            message = await session.submit(text)
            if message is not None and message.is_error:
                ui.notify("Request failed", type="negative")
        finally:
            send_btn.enable()
            refresh_preview()
            refresh_messages()

    def new_chat() -> None:
        session.new_chat()
        refresh_preview()
        refresh_messages()

    ui.context.client.on_disconnect(session.close)
    ui.timer(view_config.frame_interval, flush_scroll)

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
        "height: calc(100vh - 2rem)"
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
            ui.label(f"∞ {APP_TITLE}").classes("title text-xl font-bold")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with ui.scroll_area(on_scroll=on_scroll).classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full gap-8 p-4 pb-24")
            refresh_messages()

        # Input
        with ui.row().classes("w-full p-4 gap-2 items-center input-box no-wrap"):
            ui.icon("search").classes("text-gray-500")
            input_field = (
                ui.input(placeholder="Ask anything...")
                .props("borderless dense dark")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            preview_row = ui.row().classes("items-center gap-1")
            upload = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props('accept="image/*"')
                .classes("hidden")
            )
            ui.button(icon="image", on_click=lambda: upload.run_method("pickFiles")).props(
                "flat round dense color=grey"
            )
            camera = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props('accept="image/*" capture="environment"')
                .classes("hidden")
            )
            ui.button(
                icon="photo_camera", on_click=lambda: camera.run_method("pickFiles")
            ).props("flat round dense color=grey")
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )

