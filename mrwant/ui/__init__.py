"""UI package for Mr. Want.

Textual-based terminal interface: a single screen with a question input and
a streamed answer. Exchange logic lives in ``stream.stream_controller``.
"""
