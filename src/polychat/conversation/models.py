"""Data models for a conversation session.

Hides the representation of turns, session state and send outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..providers.base import ProviderDescriptor


FAILURE_MESSAGE = "Request failed. Please check your API settings."
CANCELLED_MESSAGE = "Request cancelled."


class Role(str, Enum):
    """Sender of a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ControllerState(str, Enum):
    """Send lifecycle state."""

    IDLE = "idle"
    SENDING = "sending"


class FailureKind(str, Enum):
    """Why a send failed. Only used internally; the user sees one message."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    AUTHENTICATION = "authentication"
    HTTP_STATUS = "http_status"
    MALFORMED_PAYLOAD = "malformed_payload"
    CANCELLED = "cancelled"


class Message(BaseModel):
    """One turn in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Sender of the turn: 'user' or 'assistant'")
    content: str = Field(description="Raw text, may contain markdown")


class SendResult(BaseModel):
    """Outcome of one send-receive cycle."""

    model_config = ConfigDict(frozen=True)

    reply: Message = Field(description="Assistant turn appended for this cycle")
    failure: FailureKind | None = Field(
        default=None,
        description="Failure classification, None on success"
    )

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class ConversationSession:
    """Process-local conversation state.

    Nothing here is persisted; the session is discarded with the process.
    """

    active_provider: "ProviderDescriptor"
    credential: str = field(default="", repr=False)
    history: list[Message] = field(default_factory=list)
    pending: bool = False
    draft: str = ""
