class MagnetizeError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputValidationError(MagnetizeError):
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(MagnetizeError):
    status_code = 404
    default_message = "Not found"


class InvalidReferenceError(MagnetizeError):
    status_code = 400
    default_message = "Either ideaId or ideaIterationId must be provided, but not both"


class DuplicateIdentifierError(MagnetizeError):
    """Public identifier collided with an existing row. Callers retry."""

    default_message = "Public identifier already in use"


class UpstreamError(MagnetizeError):
    """The LLM call or its output could not be used. Never echoes model output."""

    default_message = "The AI service could not complete the request. Please try again."


class UpstreamUnavailableError(UpstreamError):
    pass


class UpstreamTimeoutError(UpstreamError):
    default_message = "The AI service took too long to respond. Please try again."


class MalformedResponseError(UpstreamError):
    pass
