"""Exception types raised at the validation seams of the split engine."""


class CanvasSplitError(Exception):
    """Base class for errors raised by the canvas split engine."""


class NotFoundError(CanvasSplitError, LookupError):
    """A required person identity was not supplied or is not in the tree."""


class ConfigError(CanvasSplitError, ValueError):
    """An option or definition carries an invalid value."""
