"""Process-level errors raised by the core."""

__all__ = ["StartupFailure"]


class StartupFailure(RuntimeError):
    """The target gave no response at all during the pre-flight check."""
