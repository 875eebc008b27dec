"""
Stream Screen - ask one question, watch the answer stream in.

Layout: Title | Output (answer or error) | Input bar (question + action)

All exchange logic lives in StreamController; this widget only renders
ExchangeVM and forwards submit/reset intents.
"""

import logging
from typing import Any

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from mrwant.config.constants import APP_TITLE, INPUT_PLACEHOLDER
from mrwant.config.settings import Settings
from mrwant.services.generation import FragmentSource

from .stream_controller import ExchangeStatus, ExchangeVM, StreamController

logger = logging.getLogger(__name__)

_CURSOR = "▌"
_SUBMIT_LABEL = "→"
_BUSY_LABEL = "…"


class StreamScreen(Widget):
    """
    Single-exchange Q&A widget.

    The submit button is disabled while the input is blank or a stream is
    active. Once an exchange is done or errored it is replaced by "New".
    """

    BINDINGS = [
        Binding("ctrl+n", "reset", "New", show=True),
        Binding("slash", "focus_input", "Focus Input"),
    ]

    DEFAULT_CSS = """
    StreamScreen {
        layout: vertical;
        align: center middle;
        width: 100%;
        height: 100%;
    }

    #mw-title {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        margin: 0 0 2 0;
    }

    #mw-output {
        width: 100%;
        max-width: 80;
        height: auto;
        max-height: 70%;
        margin: 0 0 1 0;
        padding: 0 1;
    }

    #mw-answer {
        width: 100%;
    }

    #mw-answer.error {
        color: $error;
        content-align: center middle;
    }

    #mw-input-bar {
        width: 100%;
        max-width: 80;
        height: auto;
        border: round $primary-darken-1;
    }

    #mw-input {
        width: 1fr;
        border: none;
    }

    #mw-submit, #mw-reset {
        min-width: 5;
        width: auto;
    }
    """

    def __init__(
        self,
        source: FragmentSource,
        settings: Settings | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._controller = StreamController(
            source,
            settings,
            on_state_update=self._on_state_update,
        )
        self._last_status = ExchangeStatus.IDLE

    @property
    def controller(self) -> StreamController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Static(APP_TITLE, id="mw-title")
        with VerticalScroll(id="mw-output"):
            yield Static("", id="mw-answer")
        with Horizontal(id="mw-input-bar"):
            yield Input(placeholder=INPUT_PLACEHOLDER, id="mw-input")
            yield Button(_SUBMIT_LABEL, id="mw-submit", variant="primary", disabled=True)
            yield Button("New", id="mw-reset")

    def on_mount(self) -> None:
        self._render_state(self._controller.state)
        self.query_one("#mw-input", Input).focus()

    async def _on_state_update(self, state: ExchangeVM) -> None:
        self._render_state(state)

    def _render_state(self, state: ExchangeVM) -> None:
        """Sync every widget with ``state``."""
        if not self.is_mounted:
            return

        output = self.query_one("#mw-output", VerticalScroll)
        answer = self.query_one("#mw-answer", Static)
        inp = self.query_one("#mw-input", Input)
        submit = self.query_one("#mw-submit", Button)
        reset = self.query_one("#mw-reset", Button)

        output.display = state.shows_output
        if state.status is ExchangeStatus.ERRORED:
            answer.add_class("error")
            answer.update(Text(state.display_text))
        else:
            answer.remove_class("error")
            text = Text(state.answer)
            if state.is_streaming:
                text.append(_CURSOR, style="bold blue blink")
            answer.update(text)

        inp.disabled = state.is_streaming
        submit.display = not state.can_reset
        reset.display = state.can_reset
        submit.disabled = state.is_streaming or not inp.value.strip()
        submit.label = _BUSY_LABEL if state.is_streaming else _SUBMIT_LABEL

        if state.is_streaming:
            output.scroll_end(animate=False)

        if state.status is ExchangeStatus.ERRORED and self._last_status is not ExchangeStatus.ERRORED:
            inp.focus()
        self._last_status = state.status

    def _submit(self, question: str) -> None:
        task = self._controller.submit(question)
        if task is None:
            return
        self._render_state(self._controller.state)
        # Move focus off the input so the reader follows the answer
        self.query_one("#mw-output", VerticalScroll).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "mw-input":
            return
        state = self._controller.state
        self.query_one("#mw-submit", Button).disabled = (
            state.is_streaming or not event.value.strip()
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "mw-input":
            return
        self._submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "mw-submit":
            self._submit(self.query_one("#mw-input", Input).value)
        elif event.button.id == "mw-reset":
            self.action_reset()

    # -- Actions --

    def action_reset(self) -> None:
        """Clear the exchange and start over.

        Only offered once the exchange is done or errored, like the New button.
        """
        if not self._controller.state.can_reset:
            return
        self._controller.reset()
        inp = self.query_one("#mw-input", Input)
        inp.value = ""
        self._render_state(self._controller.state)
        inp.focus()

    def action_focus_input(self) -> None:
        self.query_one("#mw-input", Input).focus()
