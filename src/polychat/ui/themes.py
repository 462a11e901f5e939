"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes for the dark and light modes
- Which Textual theme backs each mode
- How the current preference is represented and toggled

The conversation core never sees any of this; the app holds a
``ThemePreference`` and applies it.
"""

from dataclasses import dataclass
from typing import Literal

from textual.theme import Theme

ThemeMode = Literal["dark", "light"]

# Catppuccin Mocha
DARK_THEME = Theme(
    name="polychat-dark",
    primary="#89b4fa",
    secondary="#cba6f7",
    accent="#f9e2af",
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "block-cursor-foreground": "#11111b",
        "block-cursor-background": "#f5e0dc",
        "input-cursor-background": "#cdd6f4",
        "input-selection-background": "#89b4fa 30%",
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",
        "text-muted": "#6c7086",
    },
)

# Catppuccin Latte
LIGHT_THEME = Theme(
    name="polychat-light",
    primary="#1e66f5",
    secondary="#8839ef",
    accent="#df8e1d",
    foreground="#4c4f69",
    background="#eff1f5",
    success="#40a02b",
    warning="#fe640b",
    error="#d20f39",
    surface="#e6e9ef",
    panel="#dce0e8",
    dark=False,
    variables={
        "block-cursor-foreground": "#eff1f5",
        "block-cursor-background": "#dc8a78",
        "input-cursor-background": "#4c4f69",
        "input-selection-background": "#1e66f5 25%",
        "border": "#9ca0b0",
        "border-blurred": "#bcc0cc",
        "scrollbar": "#bcc0cc",
        "scrollbar-hover": "#9ca0b0",
        "scrollbar-active": "#1e66f5",
        "scrollbar-background": "#dce0e8",
        "footer-background": "#dce0e8",
        "footer-key-foreground": "#df8e1d",
        "text-muted": "#7c7f93",
    },
)

THEMES: dict[str, Theme] = {"dark": DARK_THEME, "light": LIGHT_THEME}


@dataclass
class ThemePreference:
    """Current color mode, passed explicitly to the view layer."""

    mode: ThemeMode = "dark"

    @property
    def is_dark(self) -> bool:
        return self.mode == "dark"

    @property
    def theme_name(self) -> str:
        return THEMES[self.mode].name

    @property
    def label(self) -> str:
        return "Dark" if self.is_dark else "Light"

    def set_dark(self, dark: bool) -> None:
        self.mode = "dark" if dark else "light"

    def toggle(self) -> ThemeMode:
        """Flip between dark and light. Returns the new mode."""
        self.set_dark(not self.is_dark)
        return self.mode
