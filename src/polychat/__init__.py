"""
Polychat: a terminal chat client for hosted LLM chat-completion APIs.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision:
- providers: how each vendor's request/response is shaped
- conversation: the send lifecycle, session state and HTTP transport
- ui: how the conversation is presented
"""

__version__ = "0.1.0"

from .conversation import (
    ChatTransport,
    ConversationController,
    ConversationSession,
    Message,
    Role,
    SendResult,
)
from .providers import ProviderDescriptor, ProviderRegistry, create_provider_registry

__all__ = [
    "ChatTransport",
    "ConversationController",
    "ConversationSession",
    "Message",
    "ProviderDescriptor",
    "ProviderRegistry",
    "Role",
    "SendResult",
    "create_provider_registry",
]
