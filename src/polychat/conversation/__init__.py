from .controller import ConversationController
from .errors import (
    AuthenticationError,
    MalformedPayloadError,
    NetworkError,
    PolychatError,
    ProviderHTTPError,
    RequestTimeoutError,
    TransportError,
    UnknownProviderError,
)
from .models import (
    CANCELLED_MESSAGE,
    FAILURE_MESSAGE,
    ControllerState,
    ConversationSession,
    FailureKind,
    Message,
    Role,
    SendResult,
)
from .transport import DEFAULT_TIMEOUT, ChatTransport

__all__ = [
    "CANCELLED_MESSAGE",
    "DEFAULT_TIMEOUT",
    "FAILURE_MESSAGE",
    "AuthenticationError",
    "ChatTransport",
    "ControllerState",
    "ConversationController",
    "ConversationSession",
    "FailureKind",
    "MalformedPayloadError",
    "Message",
    "NetworkError",
    "PolychatError",
    "ProviderHTTPError",
    "RequestTimeoutError",
    "Role",
    "SendResult",
    "TransportError",
    "UnknownProviderError",
]
