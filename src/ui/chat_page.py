"""NiceGUI page: material upload panel and question chat."""

import asyncio
from datetime import datetime

from nicegui import app, events, ui

from src.assistant.service import AssistantService, get_assistant_service
from src.models.schemas import DocumentResult, SourceFile
from src.store.documents import MappingDocumentStore

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: white; }

    .title { color: #33A89D; }

    .panel-badge {
        background: #33A89D;
        color: white;
        border-radius: 8px;
    }

    .message-user {
        background: #33A89D;
        color: white;
        border-radius: 16px;
        white-space: pre-wrap;
    }

    .message-ai {
        background: #FAB18B;
        color: black;
        border-radius: 16px;
        white-space: pre-wrap;
    }

    .choose-btn { background: #EE4B2B !important; }
    .upload-btn { background: #FAB18B !important; }
    .send-btn { background: #33A89D !important; }
</style>
"""


class ChatSession:
    """Chat transcript and in-flight flags for one browser tab."""

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.pending_files: list[SourceFile] = []
        self.is_loading: bool = False
        self.is_uploading: bool = False
        self.cancel_event: asyncio.Event | None = None

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "time": datetime.now().strftime("%I:%M %p"),
        })

    def start_upload(self) -> asyncio.Event:
        """Mark an upload as running, with its own cancel event."""
        self.is_uploading = True
        self.cancel_event = asyncio.Event()
        return self.cancel_event

    def finish_upload(self) -> None:
        self.is_uploading = False
        self.cancel_event = None

    def cancel_upload(self) -> None:
        """Stop the running upload, if any, before its next batch."""
        if self.cancel_event is not None:
            self.cancel_event.set()


def upload_summary(requested: int, results: list[DocumentResult]) -> str | None:
    """Status line for an upload that ended before every file was attempted."""
    if len(results) >= requested:
        return None
    return f"Upload stopped after {len(results)} of {requested} file(s)"


def build_service() -> AssistantService:
    """Assistant bound to the current user's browser storage."""
    return get_assistant_service().with_store(MappingDocumentStore(app.storage.user))


@ui.page("/")
def chat_page() -> None:
    """Main page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    service = build_service()

    messages_container: ui.column
    status_label: ui.label
    progress_bar: ui.linear_progress
    file_select: ui.select
    file_picker: ui.upload
    input_field: ui.input
    send_btn: ui.button

    def file_options() -> dict[str, str]:
        return {name: name for name in service.store.list()}

    def refresh_files() -> None:
        file_select.set_options(file_options(), value=service.store.get_active())
        placeholder = (
            "Ask a question about the selected file..."
            if service.store.get_active()
            else "Upload or select a file first..."
        )
        input_field.props(f'placeholder="{placeholder}"')

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-ai"
        with ui.row().classes(f"w-full {align} items-start gap-2"):
            if not is_user:
                ui.icon("smart_toy").classes("text-2xl text-gray-500")
            with ui.column().classes("max-w-[70%] gap-1"):
                ui.label(msg["content"]).classes(f"px-4 py-2 text-sm {bubble}")
                ui.label(msg["time"]).classes("text-[10px] text-gray-400")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in session.messages:
                render_message(msg)
            if session.is_loading:
                ui.label("Thinking...").classes("text-gray-500 italic")

    async def handle_file(e: events.UploadEventArguments) -> None:
        session.pending_files.append(
            SourceFile(
                filename=e.file.name,
                content=await e.file.read(),
                content_type=e.file.content_type,
            )
        )
        status_label.set_text("")
        progress_bar.set_value(0)

    def on_progress(progress: int) -> None:
        progress_bar.set_value(progress / 100)
        progress_bar.set_visibility(progress > 0)

    async def upload_material() -> None:
        if session.is_uploading:
            return
        if not session.pending_files:
            status_label.set_text("Please select file(s)")
            return

        cancel_event = session.start_upload()
        files, session.pending_files = session.pending_files, []
        try:
            results = await service.upload_files(
                files,
                on_status=status_label.set_text,
                on_progress=on_progress,
                cancel_event=cancel_event,
            )
        finally:
            session.finish_upload()
            file_picker.reset()

        for result in results:
            if not result.success:
                ui.notify(result.error or f"Failed to process {result.document_name}", type="negative")
        if summary := upload_summary(len(files), results):
            status_label.set_text(summary)
        refresh_files()

    def select_file(e: events.ValueChangeEventArguments) -> None:
        service.store.set_active(e.value)
        refresh_files()

    async def send_question() -> None:
        question = (input_field.value or "").strip()
        if not question or session.is_loading:
            return

        if not service.store.get_active():
            session.add_message("ai", "Please upload or select a file first.")
            refresh_messages()
            return

        input_field.value = ""
        session.add_message("user", question)
        session.is_loading = True
        send_btn.disable()
        refresh_messages()
        try:
            answer = await service.ask(question)
        finally:
            session.is_loading = False
            send_btn.enable()
        session.add_message("ai", answer)
        refresh_messages()

    # Only a deleted client stops the upload; reconnects keep it running
    ui.context.client.on_delete(session.cancel_upload)

    # === UI Layout ===
    with ui.column().classes("w-full max-w-6xl mx-auto p-6 gap-6"):
        ui.label("Classory AI Assistant").classes(
            "w-full text-center text-3xl font-bold title"
        )

        with ui.row().classes("w-full gap-6 no-wrap items-stretch").style("height: 38rem"):
            # Material panel
            with ui.card().classes("flex-1 min-w-[300px] p-6"):
                ui.label("Teacher's Panel").classes("px-4 py-1 text-lg font-bold panel-badge")
                ui.label("Upload .txt or .pdf files for the AI to learn from.").classes(
                    "text-sm text-gray-500"
                )
                file_picker = ui.upload(
                    label="Choose Files",
                    multiple=True,
                    auto_upload=True,
                    on_upload=handle_file,
                ).props('accept=".txt,.pdf" flat bordered').classes("w-full")
                ui.button("Upload Material", on_click=upload_material).props(
                    "unelevated"
                ).classes("w-full upload-btn")
                status_label = ui.label("").classes("text-sm text-gray-500")
                progress_bar = ui.linear_progress(value=0, show_value=False).props(
                    "color=orange rounded size=8px"
                )
                progress_bar.set_visibility(False)

                ui.label("Active file for questions").classes("text-sm mt-4")
                file_select = ui.select(
                    file_options(),
                    value=service.store.get_active(),
                    on_change=select_file,
                    clearable=True,
                ).classes("w-full")

            # Chat
            with ui.card().classes("flex-[2] p-4 gap-2"):
                with ui.scroll_area().classes("flex-grow w-full"):
                    messages_container = ui.column().classes("w-full gap-3")
                    refresh_messages()

                ui.separator()
                with ui.row().classes("w-full items-center gap-2 no-wrap"):
                    input_field = (
                        ui.input(placeholder="Upload or select a file first...")
                        .props("outlined dense")
                        .classes("flex-grow")
                        .on("keydown.enter", send_question)
                    )
                    send_btn = ui.button("Send", on_click=send_question).props(
                        "unelevated"
                    ).classes("send-btn")

    refresh_files()
