"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Prompt editing (Enter to send, Shift+Enter for newline)
- Transcript rendering and scrolling
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from textual import events
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..conversation.models import FailureKind, Message, Role
from .config import (
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A transcript entry that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class PromptArea(TextArea):
    """Multi-line prompt editor.

    Enter submits; Shift+Enter (or Ctrl+J where the terminal cannot report
    Shift+Enter) inserts a newline.
    """

    class SubmitRequested(TextualMessage):
        """Posted when the user presses Enter."""

    def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            self.post_message(self.SubmitRequested())
            event.prevent_default()
            event.stop()
        elif event.key in ("shift+enter", "ctrl+j"):
            self.insert("\n")
            event.prevent_default()
            event.stop()


class ChatInputBar(Horizontal):
    """Chat input bar with prompt area and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._busy = False

    def compose(self):
        prompt = PromptArea(id="chat-input", show_line_numbers=False)
        prompt.placeholder = INPUT_PLACEHOLDER
        prompt.cursor_blink = False
        yield prompt
        yield Button("SEND", id="send-btn", variant="primary", disabled=True).with_tooltip(
            "Send message (Enter)"
        )

    def on_mount(self) -> None:
        prompt = self.query_one("#chat-input", PromptArea)
        prompt.highlight_cursor_line = False
        prompt.focus()

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", PromptArea).text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_prompt_area_submit_requested(self, event: PromptArea.SubmitRequested) -> None:
        event.stop()
        self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._refresh_send_button()

    def _submit(self) -> None:
        # Whitespace is kept; the controller decides whether the text is sendable
        value = self.text
        if self._busy or not value.strip():
            return
        self.post_message(self.Submitted(value))

    def clear(self) -> None:
        self.query_one("#chat-input", PromptArea).text = ""
        self._refresh_send_button()

    def set_busy(self, busy: bool) -> None:
        """Disable editing and sending while a request is in flight."""
        was_busy = self._busy
        self._busy = busy
        prompt = self.query_one("#chat-input", PromptArea)
        prompt.disabled = busy
        self._refresh_send_button()
        if was_busy and not busy:
            prompt.focus()

    def _refresh_send_button(self) -> None:
        button = self.query_one("#send-btn", Button)
        button.disabled = self._busy or not self.text.strip()

    def focus_input(self) -> None:
        self.query_one("#chat-input", PromptArea).focus()


class DebugPanel(RichLog):
    """Log panel for request tracing with level filtering.

    Shows timestamped log messages from the controller and HTTP layer.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Controller": "green",
        "HTTP": "magenta",
        "Registry": "blue",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def log_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Controller, HTTP, Registry)
            message: Log message (escaped, never parsed as markup)
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def debug(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript mirroring the conversation history.

    History is append-only, so syncing only mounts turns past the ones
    already rendered; a shorter history means the chat was cleared.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "No messages"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def sync(
        self,
        history: Sequence[Message],
        sending: bool = False,
        last_failure: FailureKind | None = None,
    ) -> None:
        """Render any turns not yet shown and reflect the sending state.

        ``last_failure`` describes the newest turn only; it marks that turn
        as failed when it is an assistant turn.
        """
        if len(history) < len(self._messages):
            self.clear_history()
        last_index = len(history) - 1
        for index in range(len(self._messages), len(history)):
            msg = history[index]
            failed = (
                last_failure is not None
                and index == last_index
                and msg.role == Role.ASSISTANT
            )
            self.add_message(msg, failed=failed)
        self.set_class(sending, "sending")
        if sending:
            self.border_subtitle = "Waiting for reply..."
        else:
            self._update_subtitle()

    def add_message(self, msg: Message, failed: bool = False) -> None:
        self._messages.append(msg)
        self._render_message(msg, failed)
        self._update_subtitle()
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role == Role.ASSISTANT:
                return msg.content
        return None

    def clear_history(self) -> None:
        self._messages.clear()
        self.remove_children()
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        count = len(self._messages)
        self.border_subtitle = f"{count} messages" if count else "No messages"

    def _render_message(self, msg: Message, failed: bool = False) -> None:
        if msg.role == Role.USER:
            header_text = "You >"
            css_class = "user-message"
        else:
            header_text = "< Assistant"
            css_class = "failed-message" if failed else "assistant-message"

        timestamp = datetime.now().strftime(MESSAGE_TIMESTAMP_FORMAT)
        container = ClickableMessage(content=msg.content, classes=f"chat-message {css_class}")
        container.compose_add_child(
            Static(f"{header_text} [{timestamp}]", classes="message-header", markup=False)
        )
        container.compose_add_child(Markdown(msg.content, classes="message-content"))
        self.mount(container)
