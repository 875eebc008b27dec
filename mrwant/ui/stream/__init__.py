"""
Stream Screen - one question, one streamed answer.

Provides:
- StreamScreen: Question input, streamed answer and reset affordance
- StreamController: Exchange lifecycle with single-flight and stale-delivery guards
"""

from .stream_controller import ExchangeStatus, ExchangeVM, StreamController
from .stream_screen import StreamScreen

__all__ = [
    "ExchangeStatus",
    "ExchangeVM",
    "StreamController",
    "StreamScreen",
]
