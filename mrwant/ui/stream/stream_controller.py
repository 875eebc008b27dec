"""
Controller for the Mr. Want screen.

Drives one question/answer exchange at a time: opens a stream on the
generation service, appends fragments to the answer as they arrive, and
settles the exchange to DONE or ERRORED. The screen observes ``ExchangeVM``
through callbacks and never talks to the service itself.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from mrwant.config.constants import SYSTEM_INSTRUCTION, UNAVAILABLE_MESSAGE
from mrwant.config.settings import Settings
from mrwant.exceptions import ServiceUnavailableError, classify_error
from mrwant.services.generation import FragmentSource

logger = logging.getLogger(__name__)


class ExchangeStatus(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    DONE = "done"
    ERRORED = "errored"


@dataclass
class ExchangeVM:
    """The single live exchange, as the screen sees it."""

    question: str = ""
    answer: str = ""
    status: ExchangeStatus = ExchangeStatus.IDLE
    error_message: str | None = None
    elapsed_ms: int = 0

    @property
    def is_streaming(self) -> bool:
        return self.status is ExchangeStatus.STREAMING

    @property
    def is_done(self) -> bool:
        return self.status is ExchangeStatus.DONE

    @property
    def can_reset(self) -> bool:
        return self.status in (ExchangeStatus.DONE, ExchangeStatus.ERRORED)

    @property
    def shows_output(self) -> bool:
        return bool(self.answer) or self.status in (
            ExchangeStatus.STREAMING,
            ExchangeStatus.ERRORED,
        )

    @property
    def display_text(self) -> str:
        """Error view supersedes the answer view."""
        if self.status is ExchangeStatus.ERRORED:
            return self.error_message or UNAVAILABLE_MESSAGE
        return self.answer


class StreamController:
    """
    Owns the exchange lifecycle.

    - ``submit`` starts a stream and returns immediately with its task
    - Only one exchange streams at a time (submit is a no-op while streaming)
    - ``reset`` returns to IDLE; whatever the abandoned stream delivers
      afterwards is dropped

    Every submit and reset bumps ``generation``. A streaming task remembers
    the generation it started with and stops touching state once that no
    longer matches.
    """

    def __init__(
        self,
        source: FragmentSource,
        settings: Settings | None = None,
        on_state_update: Callable[[ExchangeVM], Awaitable[None]] | None = None,
        on_fragment: Callable[[str], Awaitable[None]] | None = None,
    ):
        self.source = source
        self.on_state_update = on_state_update
        self.on_fragment = on_fragment
        self._system_instruction = (
            settings.system_instruction if settings is not None else SYSTEM_INSTRUCTION
        )
        self._state = ExchangeVM()
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ExchangeVM:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _notify_update(self) -> None:
        # Observer faults are logged and do not end the exchange.
        if not self.on_state_update:
            return
        try:
            await self.on_state_update(self._state)
        except Exception as e:
            logger.error("State observer failed: %s", e, exc_info=True)

    async def _notify_fragment(self, fragment: str) -> None:
        if not self.on_fragment:
            return
        try:
            await self.on_fragment(fragment)
        except Exception as e:
            logger.error("Fragment observer failed: %s", e, exc_info=True)

    def submit(self, question: str) -> asyncio.Task[None] | None:
        """Start streaming an answer to ``question``.

        Must be called from inside a running event loop. Returns the
        streaming task, or None when the question is blank or another
        exchange is still streaming.
        """
        if not question.strip():
            return None

        if self._state.is_streaming:
            logger.info("Ignoring submit while exchange %d is streaming", self._generation)
            return None

        self._generation += 1
        generation = self._generation
        self._state = ExchangeVM(question=question, status=ExchangeStatus.STREAMING)
        logger.info("Exchange %d started (question=%d chars)", generation, len(question))

        self._task = asyncio.get_running_loop().create_task(
            self._stream_answer(generation, question)
        )
        return self._task

    async def ask(self, question: str) -> None:
        """Submit ``question`` and wait for the exchange to settle."""
        task = self.submit(question)
        if task is not None:
            await task

    def reset(self) -> None:
        """Return to the IDLE default. Does not cancel an in-flight stream."""
        self._generation += 1
        if self._state.is_streaming:
            logger.info("Reset while streaming; exchange %d abandoned", self._generation - 1)
        self._state = ExchangeVM()

    async def _stream_answer(self, generation: int, question: str) -> None:
        if not self._is_current(generation):
            return

        start = time.monotonic()
        stream = None
        try:
            await self._notify_update()

            stream = self.source.stream(question, self._system_instruction)
            async for fragment in stream:
                if not self._is_current(generation):
                    logger.info("Dropping stale fragment from exchange %d", generation)
                    return
                if not fragment:
                    continue
                self._state.answer += fragment
                await self._notify_fragment(fragment)
                await self._notify_update()

            if self._is_current(generation):
                self._state.status = ExchangeStatus.DONE

        except asyncio.CancelledError:
            if self._is_current(generation):
                self._fail(ServiceUnavailableError(reason="cancelled"))
            raise
        except Exception as e:
            if not self._is_current(generation):
                logger.info("Ignoring failure from stale exchange %d: %s", generation, e)
                return
            logger.error(
                "Exchange %d failed: %s", generation, classify_error(e), exc_info=True
            )
            self._fail(ServiceUnavailableError())
        finally:
            if stream is not None:
                await self._close_stream(stream)
            if self._is_current(generation):
                if self._state.is_streaming:
                    self._fail(ServiceUnavailableError(reason="stream did not settle"))
                self._state.elapsed_ms = int((time.monotonic() - start) * 1000)
                logger.info(
                    "Exchange %d settled: status=%s answer=%d chars elapsed=%dms",
                    generation,
                    self._state.status.value,
                    len(self._state.answer),
                    self._state.elapsed_ms,
                )
                await self._notify_update()

    def _fail(self, error: ServiceUnavailableError) -> None:
        self._state.answer = ""
        self._state.status = ExchangeStatus.ERRORED
        self._state.error_message = error.user_message

    async def _close_stream(self, stream: object) -> None:
        aclose = getattr(stream, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as e:
            logger.warning("Failed to close stream: %s", e)
