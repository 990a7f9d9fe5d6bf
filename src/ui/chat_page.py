"""NiceGUI chat interface with streamed replies and generated images."""

from nicegui import ui

from src.models.schemas import Message, Role
from src.ui.chat_state import ChatController, ChatSession
from src.ui.relay_client import RelayClient

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; }

    .app-container {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        overflow: hidden;
    }

    .message-user { background: #2563eb; color: white; border-radius: 8px; }
    .message-assistant { background: #f3f4f6; color: #1f2937; border-radius: 8px; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    controller = ChatController(session, RelayClient())

    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "ml-auto" if is_user else "mr-auto"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.element("div").classes(f"{align} {bubble} p-3 max-w-[80%]"):
            with ui.row().classes("gap-1 items-baseline no-wrap"):
                ui.label("You: " if is_user else "AI: ").classes("font-bold")
                ui.label(msg.content).classes("whitespace-pre-wrap")
            if msg.image_url:
                ui.image(msg.image_url).props('alt="Generated image"').classes(
                    "mt-2 rounded-lg w-full"
                )

    @ui.refreshable
    def message_list() -> None:
        for msg in session.messages:
            render_message(msg)

    def on_change() -> None:
        message_list.refresh()
        scroll_area.scroll_to(percent=1.0)
        if session.is_busy:
            input_field.disable()
            send_btn.disable()
            send_btn.set_text("Sending...")
        else:
            input_field.enable()
            send_btn.enable()
            send_btn.set_text("Send")

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_busy:
            return
        input_field.value = ""
        await controller.submit(text)

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto my-8 app-container gap-0").style(
        "height: 600px"
    ):
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            with ui.column().classes("w-full p-4 gap-4"):
                message_list()

        with ui.row().classes("w-full p-4 gap-2 border-t no-wrap"):
            input_field = (
                ui.input(placeholder="Type your message...")
                .props("outlined dense")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = ui.button("Send", on_click=send_message).props("unelevated")

    session.subscribe(on_change)


def main() -> None:
    ui.run(title="DALL-E Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()
