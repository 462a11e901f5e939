"""Main Textual TUI application.

Wires the widgets to a ``ConversationController``. The app never mutates
conversation state itself: it forwards user actions to the controller and
re-renders from the controller's history whenever the session changes.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Input, Label, Select, Switch, TextArea

from ..conversation.controller import ConversationController
from ..conversation.models import FailureKind, SendResult
from .config import LogLevel
from .styles import APP_CSS
from .themes import DARK_THEME, LIGHT_THEME, ThemePreference
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class ChatApp(App):
    """Textual TUI for chatting with a hosted LLM provider."""

    CSS = APP_CSS
    TITLE = "Polychat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_request", "Cancel"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Reply"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        controller: ConversationController,
        theme_preference: ThemePreference | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._theme_preference = theme_preference or ThemePreference()
        self._log_level = log_level

    @property
    def controller(self) -> ConversationController:
        return self._controller

    @property
    def theme_preference(self) -> ThemePreference:
        return self._theme_preference

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        providers = self._controller.registry.list_providers()
        with Horizontal(id="settings-bar"):
            yield Select(
                [(p.display_name, p.id) for p in providers],
                value=self._controller.active_provider.id,
                allow_blank=False,
                id="provider-select",
            )
            yield Input(
                value=self._controller.session.credential,
                placeholder="API Key",
                password=True,
                id="api-key",
            )
            yield Switch(value=self._theme_preference.is_dark, id="theme-switch")
            yield Label(self._theme_preference.label, id="theme-label")

        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(DARK_THEME)
        self.register_theme(LIGHT_THEME)
        self.theme = self._theme_preference.theme_name

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._controller.set_debug_callback(self._route_debug)
        self._controller.add_listener(self._on_session_changed)
        self._on_session_changed()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route controller log messages to the log panel."""
        if not self.is_running:
            return
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def _on_session_changed(self) -> None:
        """Re-render transcript and affordances from the controller state."""
        if not self.is_running:
            return
        controller = self._controller
        self.query_one("#chat-history", ChatHistoryWidget).sync(
            controller.history,
            sending=controller.pending,
            last_failure=controller.last_failure,
        )
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(controller.pending)
        provider = controller.active_provider
        self.sub_title = f"{provider.display_name} | {provider.default_model}"

    # ------------------------------------------------------------------
    # Settings bar
    # ------------------------------------------------------------------

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "provider-select" or event.value is Select.BLANK:
            return
        self._controller.switch_provider(str(event.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "api-key":
            self._controller.set_credential(event.value)

    def on_switch_changed(self, event: Switch.Changed) -> None:
        if event.switch.id != "theme-switch":
            return
        self._theme_preference.set_dark(event.value)
        self.theme = self._theme_preference.theme_name
        self.query_one("#theme-label", Label).update(self._theme_preference.label)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "chat-input":
            self._controller.set_draft(event.text_area.text)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Hand the prompt to the controller; clear the input only if accepted."""
        task = self._controller.send(event.value)
        if task is None:
            if not self._controller.session.credential:
                self.notify("Enter an API key first", severity="warning", timeout=3)
            return

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.clear()
        self._await_reply(task)

    @work(exclusive=True, group="send")
    async def _await_reply(self, task: "asyncio.Task[SendResult]") -> None:
        """Wait for the in-flight send and surface its failure kind as a toast."""
        try:
            result = await task
        except asyncio.CancelledError:
            return

        if result.ok:
            return
        if result.failure == FailureKind.CANCELLED:
            self.notify("Request cancelled", severity="warning", timeout=2)
        else:
            reason = result.failure.value.replace("_", " ")
            self.notify(f"Request failed ({reason})", severity="error", timeout=5)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_cancel_request(self) -> None:
        """Cancel the in-flight request, if any."""
        self._controller.cancel()

    def action_clear_chat(self) -> None:
        if self._controller.clear_history():
            self.notify("Chat cleared", timeout=2)
        else:
            self.notify("Wait for the reply before clearing", severity="warning", timeout=2)

    def action_toggle_theme(self) -> None:
        self.query_one("#theme-switch", Switch).toggle()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    controller: ConversationController,
    theme: str = "dark",
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Conversation controller to drive
        theme: Initial color mode ("dark" or "light")
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatApp(
        controller=controller,
        theme_preference=ThemePreference(mode="light" if theme == "light" else "dark"),
        log_level=log_level,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        controller.cancel()
