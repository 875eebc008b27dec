"""Service modules for Mr. Want."""

from .generation import FragmentSource, GeminiFragmentSource

__all__ = ["FragmentSource", "GeminiFragmentSource"]
