class CityExplorerError(Exception):
    """Base class for failures surfaced to API callers as a generic 500."""


class UpstreamUnavailableError(CityExplorerError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class ShapeMismatchError(CityExplorerError):
    """An upstream response is missing a field we need, or holds the wrong type."""


class StorageUnavailableError(CityExplorerError):
    pass


class ConfigurationError(CityExplorerError):
    pass
