from collections.abc import Iterable

from ..conversation.errors import UnknownProviderError
from .base import ProviderDescriptor
from .deepseek import DeepSeekProvider
from .openai import OpenAIProvider


class ProviderRegistry:
    """Closed set of providers, kept in display order.

    Lookup by identifier never fails through ``select_provider``: an unknown
    or missing id resolves to the first registered provider, mirroring a
    dropdown that defaults to its first option.
    """

    def __init__(self, providers: Iterable[ProviderDescriptor] = ()) -> None:
        self._providers: dict[str, ProviderDescriptor] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ProviderDescriptor) -> None:
        """Add a provider at the end of the display order.

        Raises:
            ValueError: If a provider with the same id is already registered
        """
        if provider.id in self._providers:
            raise ValueError(f"Provider already registered: {provider.id}")
        self._providers[provider.id] = provider

    def list_providers(self) -> list[ProviderDescriptor]:
        """Get all providers in registration order."""
        return list(self._providers.values())

    def ids(self) -> list[str]:
        return list(self._providers)

    def select_provider(self, provider_id: str | None = None) -> ProviderDescriptor:
        """Look up a provider, falling back to the first one.

        Args:
            provider_id: Provider identifier (None selects the default)

        Returns:
            Matching provider, or the first registered provider

        Raises:
            LookupError: If the registry is empty
        """
        if not self._providers:
            raise LookupError("No providers registered")
        if provider_id is not None and provider_id in self._providers:
            return self._providers[provider_id]
        return next(iter(self._providers.values()))

    def get(self, provider_id: str) -> ProviderDescriptor:
        """Strict lookup by identifier.

        Raises:
            UnknownProviderError: If no provider has this id
        """
        try:
            return self._providers[provider_id]
        except KeyError:
            raise UnknownProviderError(provider_id, self.ids()) from None

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)


def create_provider_registry() -> ProviderRegistry:
    """Create the default provider registry.

    This factory function hides which providers ship with the client
    and the order they are offered in.

    Returns:
        Registry holding OpenAI then DeepSeek

    Examples:
        >>> registry = create_provider_registry()
        >>> registry.select_provider("deepseek").display_name
        'DeepSeek'
        >>> registry.select_provider("nope").id
        'openai'
    """
    return ProviderRegistry([OpenAIProvider(), DeepSeekProvider()])
