"""Browser-backed implementations of the capabilities the chat session uses."""

from nicegui import ui


class BrowserClipboard:
    """Clipboard backed by the connected browser."""

    def write(self, text: str) -> None:
        ui.clipboard.write(text)
