"""UI-agnostic multi-cursor editing and Unicode styling engine."""

__all__ = [
    "adapters",
    "buffer",
    "cursors",
    "runtime",
    "session",
    "styling",
]

__version__ = "0.1.0"
