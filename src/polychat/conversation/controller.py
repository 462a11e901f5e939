"""Conversation controller.

Owns the session record and drives one send-receive cycle at a time:

    Idle --send()--> Sending --reply | failure | cancel--> Idle

The synchronous part of ``send`` (guard, user turn, busy flag) runs before
the call returns, so a second ``send`` issued right after the first is
rejected by the busy flag without any locking.
"""

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .errors import TransportError
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

if TYPE_CHECKING:
    from ..providers.base import ProviderDescriptor
    from ..providers.registry import ProviderRegistry
    from .transport import ChatTransport


def _truncate(text: str, limit: int = 60) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class ConversationController:
    """Send lifecycle and history for a single conversation."""

    def __init__(
        self,
        registry: "ProviderRegistry",
        transport: "ChatTransport",
        provider_id: str | None = None,
        credential: str = "",
    ) -> None:
        self._registry = registry
        self._transport = transport
        self._session = ConversationSession(
            active_provider=registry.select_provider(provider_id),
            credential=credential,
        )
        self._listeners: list[Callable[[], None]] = []
        self._debug_callback: Callable[[str, str, str], None] | None = None
        self._current_task: asyncio.Task[SendResult] | None = None
        self._cancel_requested = False
        self._last_failure: FailureKind | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session(self) -> ConversationSession:
        return self._session

    @property
    def registry(self) -> "ProviderRegistry":
        return self._registry

    @property
    def history(self) -> tuple[Message, ...]:
        """Snapshot of the conversation, oldest first."""
        return tuple(self._session.history)

    @property
    def active_provider(self) -> "ProviderDescriptor":
        return self._session.active_provider

    @property
    def state(self) -> ControllerState:
        return ControllerState.SENDING if self._session.pending else ControllerState.IDLE

    @property
    def pending(self) -> bool:
        return self._session.pending

    @property
    def last_failure(self) -> FailureKind | None:
        """Classification of the most recent failed send, None after a success."""
        return self._last_failure

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callable invoked after every session change."""
        self._listeners.append(callback)

    def set_debug_callback(self, callback: Callable[[str, str, str], None] | None) -> None:
        """Set the debug callback for execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Session mutations
    # ------------------------------------------------------------------

    def set_credential(self, value: str) -> None:
        """Replace the credential. Not validated until the next send."""
        self._session.credential = value

    def set_draft(self, value: str) -> None:
        self._session.draft = value

    def switch_provider(self, provider_id: str | None) -> "ProviderDescriptor":
        """Select the active provider; unknown ids fall back to the first one.

        History and credential are left untouched, so the next send carries
        every prior turn to the newly selected provider.
        """
        provider = self._registry.select_provider(provider_id)
        if provider_id is not None and provider.id != provider_id:
            self._debug("warning", "Registry", f"Unknown provider '{provider_id}', using '{provider.id}'")
        if provider is not self._session.active_provider:
            self._session.active_provider = provider
            self._debug("info", "Controller", f"Switched provider to {provider.display_name}")
            self._notify()
        return provider

    def clear_history(self) -> bool:
        """Drop all turns. Refused while a request is in flight."""
        if self._session.pending:
            return False
        self._session.history.clear()
        self._last_failure = None
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Send lifecycle
    # ------------------------------------------------------------------

    def send(self, input_text: str | None = None) -> "asyncio.Task[SendResult] | None":
        """Start a send-receive cycle.

        Silently does nothing when the input is blank, no credential is set,
        or a request is already in flight.

        Args:
            input_text: Text to send (None sends the current draft)

        Returns:
            Task resolving to the SendResult, or None if the send was ignored

        Raises:
            RuntimeError: If called outside a running event loop
        """
        session = self._session
        text = session.draft if input_text is None else input_text

        if not text.strip():
            self._debug("debug", "Controller", "Send ignored: empty input")
            return None
        if not session.credential:
            self._debug("debug", "Controller", "Send ignored: no credential set")
            return None
        if session.pending:
            self._debug("debug", "Controller", "Send ignored: request already in flight")
            return None

        loop = asyncio.get_running_loop()

        provider = session.active_provider
        session.history.append(Message(role=Role.USER, content=text))
        session.draft = ""
        session.pending = True
        self._cancel_requested = False

        body = provider.build_request_body(list(session.history), provider.default_model)
        headers = provider.build_headers(session.credential)
        self._notify()

        self._debug("info", "Controller", f"Sending: '{_truncate(text)}'")
        task = loop.create_task(self._complete(provider, body, headers))
        task.add_done_callback(self._on_task_done)
        self._current_task = task
        return task

    async def ask(self, input_text: str) -> SendResult | None:
        """Send and wait for the reply. Returns None if the send was ignored."""
        task = self.send(input_text)
        if task is None:
            return None
        return await task

    def cancel(self) -> bool:
        """Cancel the in-flight request.

        Returns:
            True if a request was cancelled, False if none was in flight
        """
        task = self._current_task
        if task is None or task.done():
            return False
        self._cancel_requested = True
        task.cancel()
        self._debug("info", "Controller", "Cancelling in-flight request")
        return True

    async def _complete(
        self,
        provider: "ProviderDescriptor",
        body: dict[str, Any],
        headers: dict[str, str],
    ) -> SendResult:
        """Network half of a send: call the provider and append the reply turn."""
        failure: FailureKind | None = None
        try:
            try:
                self._debug(
                    "debug", "HTTP",
                    f"POST {provider.endpoint} model={body.get('model')} "
                    f"messages={len(body.get('messages', []))}"
                )
                response_body = await self._transport.post_json(provider.endpoint, body, headers)
                reply_text = provider.extract_reply_text(response_body)
                self._debug("info", "HTTP", f"Reply received ({len(reply_text)} chars)")
            except asyncio.CancelledError:
                if not self._cancel_requested:
                    # Cancelled from outside (e.g. shutdown): record the turn, keep propagating
                    self._append_reply(CANCELLED_MESSAGE, FailureKind.CANCELLED)
                    raise
                failure = FailureKind.CANCELLED
                reply_text = CANCELLED_MESSAGE
            except TransportError as e:
                failure = e.kind
                reply_text = FAILURE_MESSAGE
                self._debug("warning", "HTTP", f"Request failed [{e.kind.value}]: {e}")
            except Exception as e:
                failure = FailureKind.NETWORK
                reply_text = FAILURE_MESSAGE
                self._debug("error", "HTTP", f"Request failed [{type(e).__name__}]: {e}")

            return self._append_reply(reply_text, failure)
        finally:
            self._finish()

    def _append_reply(self, reply_text: str, failure: FailureKind | None) -> SendResult:
        reply = Message(role=Role.ASSISTANT, content=reply_text)
        self._session.history.append(reply)
        self._last_failure = failure
        return SendResult(reply=reply, failure=failure)

    def _finish(self) -> None:
        self._session.pending = False
        self._current_task = None
        self._cancel_requested = False
        self._notify()

    def _on_task_done(self, task: "asyncio.Task[SendResult]") -> None:
        # A task cancelled before its first step never enters _complete
        if task.cancelled() and self._session.pending:
            self._append_reply(CANCELLED_MESSAGE, FailureKind.CANCELLED)
            self._finish()
