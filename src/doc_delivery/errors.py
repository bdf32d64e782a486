"""Failures raised by the conversion orchestrator.

Every class derives from `ConversionError` so HTTP or UI callers can map the
whole family to one user-facing message while logs keep the detail.
"""


class ConversionError(RuntimeError):
    pass


class ConfigurationError(ConversionError):
    """Conversion service settings are missing or malformed."""


class TransportError(ConversionError):
    """An HTTP call to the conversion service or the file host failed."""

    def __init__(self, message: str, *, status_code: int | None, body: str = "", stage: str = "submit") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.stage = stage


class ProtocolError(ConversionError):
    """A successful response did not carry the expected job payload."""

    def __init__(self, message: str, *, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


class RemoteJobError(ConversionError):
    """The remote job finished with status `error`."""

    def __init__(self, message: str, *, task: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.task = task


class ExtractionError(ConversionError):
    """The job did not error but no exported file URL could be located."""

    def __init__(self, message: str, *, tasks: list[dict[str, object]] | None = None) -> None:
        super().__init__(message)
        self.tasks = tasks or []


class EmptyDocumentError(ValueError):
    """The HTML submitted for conversion has no content."""
