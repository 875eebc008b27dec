"""Textual application hosting the Mr. Want screen."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding

from mrwant.config.constants import APP_TITLE
from mrwant.config.settings import Settings
from mrwant.services.generation import FragmentSource, GeminiFragmentSource

from .stream import StreamScreen

logger = logging.getLogger(__name__)


class MrWantApp(App[None]):
    """Full-screen single question/answer interface."""

    TITLE = APP_TITLE
    AUTO_FOCUS = "#mw-input"

    CSS = """
    Screen {
        layout: vertical;
        align: center middle;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Settings, source: FragmentSource | None = None) -> None:
        super().__init__()
        self.settings = settings
        self.source = source if source is not None else GeminiFragmentSource(settings)

    def compose(self) -> ComposeResult:
        yield StreamScreen(self.source, self.settings, id="mw-screen")

    def on_mount(self) -> None:
        logger.info(
            "Mr. Want started (model=%s key_set=%s)",
            self.settings.gemini_model,
            self.settings.has_api_key,
        )
        if not self.settings.has_api_key:
            logger.warning("No API key configured; every question will fail")
