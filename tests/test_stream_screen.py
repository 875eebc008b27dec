"""Pilot-based tests for StreamScreen inside MrWantApp."""

from __future__ import annotations

import pytest
from textual.containers import VerticalScroll
from textual.widgets import Button, Input, Static

from fake_sources import ListFragmentSource, QueueFragmentSource, settle
from mrwant.config.constants import UNAVAILABLE_MESSAGE
from mrwant.config.settings import Settings
from mrwant.ui.app import MrWantApp
from mrwant.ui.stream import ExchangeStatus, ExchangeVM, StreamScreen

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_app(source) -> MrWantApp:
    return MrWantApp(Settings(google_api_key="test-key"), source=source)


async def _ask(app: MrWantApp, pilot, question: str) -> StreamScreen:
    """Type ``question``, press Enter and wait for the exchange to settle."""
    screen = app.query_one("#mw-screen", StreamScreen)
    await pilot.press(*question)
    await pilot.press("enter")
    await pilot.pause()
    task = screen.controller._task
    if task is not None:
        await task
    await pilot.pause()
    return screen


# ---------------------------------------------------------------------------
# Tests: Layout
# ---------------------------------------------------------------------------


class TestLayout:
    @pytest.mark.asyncio
    async def test_mounts(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one("#mw-screen", StreamScreen) is not None

    @pytest.mark.asyncio
    async def test_title_shown(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            assert "Mr. Want" in str(app.query_one("#mw-title", Static).content)

    @pytest.mark.asyncio
    async def test_input_focused_on_start(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one("#mw-input", Input).has_focus

    @pytest.mark.asyncio
    async def test_output_hidden_when_idle(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one("#mw-output", VerticalScroll).display is False

    @pytest.mark.asyncio
    async def test_submit_disabled_and_reset_hidden_initially(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one("#mw-submit", Button).disabled is True
            assert app.query_one("#mw-reset", Button).display is False


# ---------------------------------------------------------------------------
# Tests: Input
# ---------------------------------------------------------------------------


class TestInput:
    @pytest.mark.asyncio
    async def test_typing_enables_submit(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("h", "i")
            await pilot.pause()
            assert app.query_one("#mw-submit", Button).disabled is False

    @pytest.mark.asyncio
    async def test_spaces_keep_submit_disabled(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("space", "space")
            await pilot.pause()
            assert app.query_one("#mw-submit", Button).disabled is True

    @pytest.mark.asyncio
    async def test_blank_enter_does_not_call_service(self) -> None:
        source = ListFragmentSource(["x"])
        app = _make_app(source)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("space", "enter")
            await pilot.pause()
            screen = app.query_one("#mw-screen", StreamScreen)
            assert source.calls == []
            assert screen.controller.state == ExchangeVM()


# ---------------------------------------------------------------------------
# Tests: Exchange rendering
# ---------------------------------------------------------------------------


class TestExchange:
    @pytest.mark.asyncio
    async def test_answer_rendered_when_done(self) -> None:
        app = _make_app(ListFragmentSource(["4"]))
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = await _ask(app, pilot, "sum")

            assert screen.controller.state.status is ExchangeStatus.DONE
            assert app.query_one("#mw-output", VerticalScroll).display is True
            assert str(app.query_one("#mw-answer", Static).content) == "4"

    @pytest.mark.asyncio
    async def test_reset_button_replaces_submit_when_done(self) -> None:
        app = _make_app(ListFragmentSource(["4"]))
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            await _ask(app, pilot, "sum")

            assert app.query_one("#mw-reset", Button).display is True
            assert app.query_one("#mw-submit", Button).display is False

    @pytest.mark.asyncio
    async def test_controls_locked_while_streaming(self) -> None:
        source = QueueFragmentSource()
        app = _make_app(source)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = app.query_one("#mw-screen", StreamScreen)
            await pilot.press("h", "i", "enter")
            await pilot.pause()
            await settle()

            source.queues[0].put_nowait("Hel")
            await settle()
            await pilot.pause()

            assert screen.controller.state.is_streaming
            assert app.query_one("#mw-input", Input).disabled is True
            assert app.query_one("#mw-submit", Button).disabled is True
            assert app.query_one("#mw-reset", Button).display is False
            assert str(app.query_one("#mw-answer", Static).content).startswith("Hel")

            source.queues[0].put_nowait("lo")
            source.queues[0].put_nowait(None)
            await screen.controller._task
            await pilot.pause()

            assert app.query_one("#mw-input", Input).disabled is False
            assert str(app.query_one("#mw-answer", Static).content) == "Hello"

    @pytest.mark.asyncio
    async def test_error_shows_generic_message(self) -> None:
        source = ListFragmentSource(["partial"], error=ConnectionError("down"), error_after=1)
        app = _make_app(source)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = await _ask(app, pilot, "hi")

            answer = app.query_one("#mw-answer", Static)
            assert screen.controller.state.status is ExchangeStatus.ERRORED
            assert answer.has_class("error")
            assert str(answer.content) == UNAVAILABLE_MESSAGE
            assert app.query_one("#mw-reset", Button).display is True

    @pytest.mark.asyncio
    async def test_error_returns_focus_to_input(self) -> None:
        source = ListFragmentSource([], error=RuntimeError("boom"))
        app = _make_app(source)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            await _ask(app, pilot, "hi")
            await pilot.pause()

            assert app.query_one("#mw-input", Input).has_focus


# ---------------------------------------------------------------------------
# Tests: Reset
# ---------------------------------------------------------------------------


class TestReset:
    @pytest.mark.asyncio
    async def test_new_button_resets(self) -> None:
        app = _make_app(ListFragmentSource(["4"]))
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = await _ask(app, pilot, "sum")

            await pilot.click("#mw-reset")
            await pilot.pause()

            assert screen.controller.state == ExchangeVM()
            assert app.query_one("#mw-input", Input).value == ""
            assert app.query_one("#mw-input", Input).has_focus
            assert app.query_one("#mw-output", VerticalScroll).display is False
            assert app.query_one("#mw-submit", Button).display is True

    @pytest.mark.asyncio
    async def test_ctrl_n_resets_when_done(self) -> None:
        app = _make_app(ListFragmentSource(["4"]))
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = await _ask(app, pilot, "sum")

            await pilot.press("ctrl+n")
            await pilot.pause()

            assert screen.controller.state == ExchangeVM()
            assert app.query_one("#mw-input", Input).has_focus

    @pytest.mark.asyncio
    async def test_ctrl_n_ignored_when_idle(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = app.query_one("#mw-screen", StreamScreen)

            await pilot.press("ctrl+n")
            await pilot.pause()

            assert screen.controller.generation == 0

    @pytest.mark.asyncio
    async def test_ctrl_n_ignored_while_streaming(self) -> None:
        source = QueueFragmentSource()
        app = _make_app(source)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            screen = app.query_one("#mw-screen", StreamScreen)
            await pilot.press("h", "i", "enter")
            await pilot.pause()
            await settle()
            task = screen.controller._task
            generation = screen.controller.generation

            await pilot.press("ctrl+n")
            await pilot.pause()

            assert screen.controller.generation == generation
            assert screen.controller.state.is_streaming
            assert screen.controller.state.question == "hi"

            source.queues[0].put_nowait("still here")
            source.queues[0].put_nowait(None)
            await task
            await pilot.pause()

            assert screen.controller.state.status is ExchangeStatus.DONE
            assert str(app.query_one("#mw-answer", Static).content) == "still here"


# ---------------------------------------------------------------------------
# Tests: App bindings
# ---------------------------------------------------------------------------


class TestAppBindings:
    @pytest.mark.asyncio
    async def test_escape_does_not_quit(self) -> None:
        app = _make_app(ListFragmentSource())
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("h", "escape")
            await pilot.pause()

            assert app.is_running
            assert app.query_one("#mw-input", Input).value == "h"
