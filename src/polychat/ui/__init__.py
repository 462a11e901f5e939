"""Terminal UI module for polychat.

Provides a Textual-based TUI over a ConversationController.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (prompt editing, transcript, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and the dark/light preference
- formatting.py: Markdown rendering for console output
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .config import LogLevel
from .themes import ThemePreference
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, PromptArea

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "PromptArea",
    "ThemePreference",
    "run_chat_tui",
]
