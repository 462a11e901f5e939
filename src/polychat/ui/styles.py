"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Colors come from theme variables so the same sheet serves dark and light.

Layout, top to bottom:
- Settings bar: provider dropdown, API key, theme switch
- Chat transcript (fills remaining height)
- Log panel (hidden until toggled)
- Input bar: prompt area + Send
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Settings Bar
   ============================================ */
#settings-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-bottom: solid $border;
}

#provider-select {
    width: 28;
}

#api-key {
    width: 1fr;
    margin: 0 1;
}

#theme-label {
    height: 3;
    padding: 1 1 0 1;
    color: $text-muted;
}

/* ============================================
   Chat Transcript
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }

    &.sending {
        border: round $warning;
        border-title-color: $warning;
    }
}

.chat-message {
    width: 1fr;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

/* User turns sit on the right, assistant turns on the left */
.user-message {
    margin-left: 8;
    border-right: tall $primary;
    background: $primary 12%;

    & .message-header {
        color: $primary;
        text-align: right;
    }
}

.assistant-message {
    margin-right: 8;
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }
}

.failed-message {
    margin-right: 8;
    border-left: tall $error;
    background: $error 8%;

    & .message-header {
        color: $error;
    }
}

.message-header {
    height: auto;
    text-style: bold;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* ============================================
   Input Bar
   ============================================ */
ChatInputBar {
    height: 6;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    text-style: bold;
}

/* ============================================
   Markdown Content
   ============================================ */
Markdown {
    margin: 0;
    padding: 0;
}

MarkdownFence {
    background: $surface;
    margin: 1 0;
}
"""
