"""Service-layer exceptions."""


class OptionUnavailableError(Exception):
    """Raised when a chosen option does not exist or its prerequisites are not met."""
