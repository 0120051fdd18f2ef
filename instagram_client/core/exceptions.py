"""Exceptions raised by the Instagram client."""

from typing import Optional


class InstagramAPIError(Exception):
    """Base exception for the Instagram client."""


class NotAuthenticatedError(InstagramAPIError):
    """Raised when a request is attempted before an access token is set."""


class MalformedURLError(InstagramAPIError):
    """Raised when the request path does not produce a valid URL."""


class UnsupportedMethodError(InstagramAPIError):
    """Raised for an HTTP method other than GET, POST, PUT or DELETE."""


class TransportError(InstagramAPIError):
    """Network failure, or the server answered with an empty body."""


class ProtocolError(InstagramAPIError):
    """The response did not carry a successful envelope."""


class EnvelopeError(ProtocolError):
    """The response body is not a well-formed {meta, data} envelope."""


class APIError(ProtocolError):
    """The envelope reported a non-200 meta code."""

    def __init__(
        self,
        code: int,
        error_type: Optional[str] = None,
        error_message: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.code = code
        self.error_type = error_type
        self.error_message = error_message
        self.status_code = status_code
        detail = error_message or "Unknown error"
        if error_type:
            detail = f"{error_type}: {detail}"
        super().__init__(f"Instagram API error {code}: {detail}")


class DecodeError(InstagramAPIError):
    """The payload does not match the shape of the requested model."""
