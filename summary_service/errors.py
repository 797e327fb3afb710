class SummaryError(Exception):
    """Base for failures surfaced to callers as a client error."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(SummaryError):
    """Text missing, empty, not a string, or without any sentence."""

    status_code = 400


class UnprocessableInput(SummaryError):
    """Text over the length cap, or an unrecognized length tier."""

    status_code = 422


class SetupError(Exception):
    """Raised when service setup fails."""
    pass
