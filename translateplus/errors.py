"""Error taxonomy for TranslatePlus API calls.

Every failure surfaces as a single ``TranslatePlusError`` tagged with an
``ErrorKind``. Callers branch on ``err.kind`` rather than on subclasses:

    try:
        await client.translate("Hello", target="fr")
    except TranslatePlusError as err:
        if err.kind is ErrorKind.RATE_LIMIT:
            ...

Validation errors are raised client-side before any network activity.
All other kinds come from an HTTP response or from the transport layer.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    RATE_LIMIT = "rate_limit"
    API = "api"


# Status codes with a dedicated kind; anything else non-2xx is ErrorKind.API
_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHENTICATION,
    402: ErrorKind.INSUFFICIENT_CREDITS,
    429: ErrorKind.RATE_LIMIT,
}


class TranslatePlusError(Exception):
    """Raised for every client-side or API-side failure."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.API,
        status_code: int | None = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.response = response

    def __repr__(self) -> str:
        return (
            f"TranslatePlusError(kind={self.kind.value!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )

    @classmethod
    def validation(cls, message: str) -> "TranslatePlusError":
        return cls(message, kind=ErrorKind.VALIDATION)

    @classmethod
    def from_status(
        cls, status_code: int, body: Any, default_message: str
    ) -> "TranslatePlusError":
        """Classify a non-2xx response.

        Args:
            status_code: HTTP status of the response.
            body: Parsed JSON body, or None if it was empty or unparsable.
            default_message: Used when the body has no ``detail`` field.
        """
        message = default_message
        if isinstance(body, dict) and body.get("detail") is not None:
            message = str(body["detail"])
        return cls(
            message,
            kind=classify_status(status_code),
            status_code=status_code,
            response=body,
        )


def classify_status(status_code: int) -> ErrorKind:
    return _STATUS_KINDS.get(status_code, ErrorKind.API)
