"""Exception hierarchy for polychat.

Transport errors carry a ``FailureKind`` so callers can tell failure modes
apart even though the transcript shows a single failure message.
"""

from .models import FailureKind


class PolychatError(Exception):
    """Base class for all polychat errors."""


class UnknownProviderError(PolychatError, LookupError):
    """Raised by strict provider lookup for an unregistered id."""

    def __init__(self, provider_id: str, known: list[str]) -> None:
        super().__init__(
            f"Unsupported provider: {provider_id}. "
            f"Supported providers: {', '.join(repr(k) for k in known)}"
        )
        self.provider_id = provider_id


class TransportError(PolychatError):
    """A chat-completion request did not produce a usable JSON body."""

    kind: FailureKind = FailureKind.NETWORK


class NetworkError(TransportError):
    kind = FailureKind.NETWORK


class RequestTimeoutError(TransportError):
    kind = FailureKind.TIMEOUT


class ProviderHTTPError(TransportError):
    """Provider answered with a non-2xx status."""

    kind = FailureKind.HTTP_STATUS

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Provider returned HTTP {status_code}")
        self.status_code = status_code


class AuthenticationError(ProviderHTTPError):
    """Provider rejected the credential (HTTP 401/403)."""

    kind = FailureKind.AUTHENTICATION


class MalformedPayloadError(TransportError):
    """Response body could not be parsed as JSON."""

    kind = FailureKind.MALFORMED_PAYLOAD
