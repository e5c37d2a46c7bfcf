"""Custom exceptions for data loading, decoding and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when storylet files are missing, unreadable or not valid JSONC."""


class DataValidationError(DataError):
    """Raised when a storylet fails structural validation on save."""


class StoryletDecodeError(DataError):
    """Raised when a serialized record cannot be turned into a storylet.

    ``path`` locates the offending value inside the record, e.g.
    ``options[1].prerequisites[0].properties.delta``.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)
