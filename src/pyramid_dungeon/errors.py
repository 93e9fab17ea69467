class TopologyError(Exception):
    """Base error for dungeon topology generation."""


class InvalidDimension(TopologyError, ValueError):
    """Raised when a grid, cell or footprint size is not usable (e.g., zero or negative)."""


class OutOfBounds(TopologyError, IndexError):
    """Raised when a grid coordinate falls outside the room grid."""


class GenerationExhausted(TopologyError):
    """Raised when no correct path could be started on the grid."""


class GridSealedError(TopologyError):
    """Raised when a room is claimed after generation has finished."""


class SettingsError(TopologyError):
    """Raised when generation settings fail validation."""
