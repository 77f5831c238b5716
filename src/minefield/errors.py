"""
Exceptions raised by the minefield engine.

Player input mistakes (bad coordinates, revealed cells) are absorbed as
no-ops and never reach this module.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidSizeError(MinefieldError, ValueError):
    """Board size is smaller than one."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Board size must be at least 1, got {size}")
        self.size = size


class CorruptSaveError(MinefieldError, ValueError):
    """A serialized board could not be decoded."""


class NoActiveGameError(MinefieldError, RuntimeError):
    """A session operation needs a board but none is loaded."""
