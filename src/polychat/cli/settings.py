"""Configuration and session factory for the CLI.

Centralizes reading environment variables and building a controller.
Hides configuration details from command implementations; the
conversation core itself never reads the environment.
"""

import os

from rich.console import Console

from ..conversation import DEFAULT_TIMEOUT, ChatTransport, ConversationController, UnknownProviderError
from ..providers import ProviderRegistry, create_provider_registry

# Default console for output
_console = Console()

# Environment variable holding each provider's API key
CREDENTIAL_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}


def get_default_provider_id() -> str:
    """Provider used when --provider is not given.

    Environment variables:
        POLYCHAT_PROVIDER: Provider id (default: openai)
    """
    return os.getenv("POLYCHAT_PROVIDER", "openai").lower()


def get_credential(provider_id: str) -> str:
    """API key for a provider from its environment variable, or "".

    Environment variables:
        OPENAI_API_KEY: OpenAI API key
        DEEPSEEK_API_KEY: DeepSeek API key
    """
    env_var = CREDENTIAL_ENV_VARS.get(provider_id)
    if env_var is None:
        return ""
    return os.getenv(env_var, "")


def get_timeout(console: Console | None = None) -> float:
    """Request timeout in seconds.

    Environment variables:
        POLYCHAT_TIMEOUT: Timeout in seconds (default: 60)
    """
    con = console or _console
    raw = os.getenv("POLYCHAT_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        con.print(f"[yellow]Warning: invalid POLYCHAT_TIMEOUT '{raw}', using {DEFAULT_TIMEOUT:g}s[/yellow]")
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        con.print(f"[yellow]Warning: POLYCHAT_TIMEOUT must be positive, using {DEFAULT_TIMEOUT:g}s[/yellow]")
        return DEFAULT_TIMEOUT
    return timeout


def require_provider_id(
    registry: ProviderRegistry,
    provider_id: str | None,
    console: Console | None = None
) -> str:
    """Resolve and validate the provider id for a command.

    Raises:
        SystemExit: If the provider is not registered
    """
    import typer

    con = console or _console
    resolved = (provider_id or get_default_provider_id()).lower()
    try:
        return registry.get(resolved).id
    except UnknownProviderError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def create_session(
    provider_id: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
    console: Console | None = None,
) -> tuple[ConversationController, ChatTransport]:
    """Build a controller and the transport it sends through.

    The caller owns the transport and must close it.

    Args:
        provider_id: Provider id (None reads POLYCHAT_PROVIDER)
        api_key: API key (None reads the provider's environment variable)
        timeout: Request timeout in seconds (None reads POLYCHAT_TIMEOUT)
        console: Optional Rich console for output

    Returns:
        Tuple of (controller, transport)
    """
    con = console or _console
    registry = create_provider_registry()
    resolved_id = require_provider_id(registry, provider_id, con)
    credential = api_key if api_key is not None else get_credential(resolved_id)

    transport = ChatTransport(timeout=timeout if timeout is not None else get_timeout(con))
    controller = ConversationController(
        registry,
        transport,
        provider_id=resolved_id,
        credential=credential,
    )
    return controller, transport
