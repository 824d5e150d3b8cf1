from .timer import SessionTimer, format_elapsed

__all__ = ["SessionTimer", "format_elapsed"]
