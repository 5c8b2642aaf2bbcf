"""Custom exceptions for docgateway."""


class DocGatewayError(Exception):
    """Base exception for docgateway operations."""


class ServiceError(DocGatewayError):
    """A collaborating service failed or could not be reached."""


class NotFoundError(ServiceError):
    """A collaborating service answered 404."""


class ExportError(DocGatewayError):
    """Base class for failures that abort an export."""


class ProjectNotFoundError(ExportError):
    """The requested project does not exist."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project '{project_id}' does not exist.")
        self.project_id = project_id


class TocFetchError(ExportError):
    """The table of contents could not be fetched."""


class DocumentFetchError(ExportError):
    """A document referenced by the table of contents could not be fetched."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Document '{key}': {message}")
        self.key = key


class RenderError(ExportError):
    """The PDF renderer answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(
            f"Exception during generating pdf. Status code: {status_code}. Message: {message}."
        )
        self.status_code = status_code
        self.message = message
