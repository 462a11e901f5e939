"""Text formatting utilities.

Hides the details of how message text is turned into a rich renderable
outside the TUI (the one-shot ``ask`` command prints through these).
"""

from rich.markdown import Markdown
from rich.panel import Panel

from ..conversation.models import Message, Role


def render_markdown(text: str) -> Markdown:
    """Render raw message text as markdown (paragraphs, emphasis, code, lists)."""
    return Markdown(text, code_theme="monokai")


def render_turn(msg: Message, title: str | None = None) -> Panel:
    """Render one turn as a titled panel for console output.

    Args:
        msg: Message to render
        title: Panel title (defaults to the sender)

    Returns:
        Panel wrapping the markdown body
    """
    if msg.role == Role.USER:
        return Panel(render_markdown(msg.content), title=title or "You", border_style="blue", title_align="right")
    return Panel(render_markdown(msg.content), title=title or "Assistant", border_style="magenta", title_align="left")
