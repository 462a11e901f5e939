from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

from ..conversation.models import Message


class ProviderDescriptor(ABC):
    """Abstract descriptor for a chat-completion provider.

    This module hides the design decision of how each vendor's API is shaped.
    Implementations must handle provider-specific details like:
    - Request body layout
    - Authentication headers
    - Locating the reply text in a response body

    Descriptors are static and never hold per-conversation state. All three
    adapter methods are pure; the network call is made by the controller
    using their outputs.
    """

    id: ClassVar[str]
    display_name: ClassVar[str]
    endpoint: ClassVar[str]
    default_model: ClassVar[str]
    fallback_reply: ClassVar[str]

    @abstractmethod
    def build_request_body(self, history: Sequence[Message], model: str) -> dict[str, Any]:
        """Build the JSON request body.

        Args:
            history: Full conversation history, oldest first
            model: Model identifier to request

        Returns:
            JSON-serializable payload
        """
        pass

    @abstractmethod
    def build_headers(self, credential: str) -> dict[str, str]:
        """Build request headers carrying the credential.

        Args:
            credential: User-supplied API key

        Returns:
            Header map including content type and authorization
        """
        pass

    @abstractmethod
    def extract_reply_text(self, response_body: Any) -> str:
        """Extract the assistant reply from a parsed response body.

        Must never raise for unexpected JSON; returns ``fallback_reply``
        when the expected field is absent.

        Args:
            response_body: Parsed JSON response

        Returns:
            Reply text
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, model={self.default_model!r})"


class OpenAICompatibleProvider(ProviderDescriptor):
    """Descriptor for APIs that speak the OpenAI chat-completions shape.

    Request: ``{"model": ..., "messages": [{"role", "content"}, ...]}``
    with bearer authentication. Reply: ``choices[0].message.content``.
    """

    def build_request_body(self, history: Sequence[Message], model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {"role": msg.role.value, "content": msg.content}
                for msg in history
            ],
        }

    def build_headers(self, credential: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }

    def extract_reply_text(self, response_body: Any) -> str:
        if not isinstance(response_body, dict):
            return self.fallback_reply

        choices = response_body.get("choices")
        if not isinstance(choices, list) or not choices:
            return self.fallback_reply

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None

        # Empty content is treated the same as a missing one
        if not isinstance(content, str) or not content:
            return self.fallback_reply
        return content
