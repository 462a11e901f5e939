"""Main CLI application using Typer."""
import asyncio
from enum import Enum

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..providers import create_provider_registry
from .settings import CREDENTIAL_ENV_VARS, create_session, get_credential

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="polychat",
    help="Chat with hosted LLM providers from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


class ThemeChoice(str, Enum):
    """Initial color mode for the TUI."""

    DARK = "dark"
    LIGHT = "light"


@app.command()
def chat(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider id (default: $POLYCHAT_PROVIDER or openai)"
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key (default: the provider's *_API_KEY variable)"
    ),
    theme: ThemeChoice = typer.Option(
        ThemeChoice.DARK,
        "--theme",
        "-t",
        help="Initial color theme"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Request timeout in seconds (default: $POLYCHAT_TIMEOUT or 60)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
):
    """Open the interactive chat TUI."""
    from ..ui import run_chat_tui

    controller, transport = create_session(provider, api_key, timeout, console)

    async def _chat():
        async with transport:
            await run_chat_tui(controller, theme=theme.value, log_level=log_level)

    asyncio.run(_chat())


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider id (default: $POLYCHAT_PROVIDER or openai)"
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key (default: the provider's *_API_KEY variable)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Request timeout in seconds (default: $POLYCHAT_TIMEOUT or 60)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print request trace"
    ),
):
    """Send a single message and print the reply."""
    from ..ui.formatting import render_turn

    if not prompt.strip():
        console.print("[red]Error: prompt is empty[/red]")
        raise typer.Exit(code=1)

    controller, transport = create_session(provider, api_key, timeout, console)
    selected = controller.active_provider

    if not controller.session.credential:
        env_var = CREDENTIAL_ENV_VARS.get(selected.id, "the provider's API key variable")
        console.print(f"[red]Error: no API key for {selected.display_name}. Pass --api-key or set {env_var}[/red]")
        raise typer.Exit(code=1)

    if verbose:
        def _trace(level: str, component: str, message: str) -> None:
            console.print(f"[dim]{level.upper():<7} {escape(f'[{component}] {message}')}[/dim]", highlight=False)

        controller.set_debug_callback(_trace)

    async def _ask():
        async with transport:
            return await controller.ask(prompt)

    result = asyncio.run(_ask())
    if result is None:
        console.print("[red]Error: message was not sent[/red]")
        raise typer.Exit(code=1)

    console.print(render_turn(result.reply, title=selected.display_name))
    if not result.ok:
        console.print(f"[dim]Failure: {result.failure.value}[/dim]")
        raise typer.Exit(code=1)


@app.command()
def providers():
    """List the supported providers."""
    registry = create_provider_registry()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Model", style="yellow")
    table.add_column("Endpoint", style="dim")
    table.add_column("Key", width=12)

    for descriptor in registry.list_providers():
        env_var = CREDENTIAL_ENV_VARS.get(descriptor.id, "")
        key_status = "[green]set[/green]" if get_credential(descriptor.id) else "[dim]not set[/dim]"
        table.add_row(
            descriptor.id,
            descriptor.display_name,
            descriptor.default_model,
            descriptor.endpoint,
            key_status if env_var else "[dim]-[/dim]",
        )

    console.print(table)


if __name__ == "__main__":
    app()
