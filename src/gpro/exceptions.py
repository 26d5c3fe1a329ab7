class GproError(Exception):
    """Base exception for gpro."""


class LayoutError(GproError, ValueError):
    """Raised when the layout engine is asked to do something impossible.

    These are caller contract violations (split index out of range, splitting
    an empty line, a viewport too small to hold anything), never malformed
    song input.
    """


class ConfigError(GproError):
    """Raised when a configuration file cannot be read or has bad values."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Config error in {path}: {reason}")
