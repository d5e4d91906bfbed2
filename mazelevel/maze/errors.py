"""Exceptions raised by maze generation."""


class MazeError(Exception):
    """Base class for all generator failures."""


class InvalidConfiguration(MazeError, ValueError):
    """Width/height (or another config field) is unusable."""


class NoFloorAvailable(MazeError):
    """Not enough distinct floor tiles to place the required occupants."""


class GenerationInvariantError(MazeError, RuntimeError):
    """An internal post-condition failed; the level would be unplayable."""


__all__ = ["MazeError", "InvalidConfiguration", "NoFloorAvailable", "GenerationInvariantError"]
