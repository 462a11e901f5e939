from .base import OpenAICompatibleProvider, ProviderDescriptor
from .deepseek import DeepSeekProvider
from .openai import OpenAIProvider
from .registry import ProviderRegistry, create_provider_registry

__all__ = [
    "DeepSeekProvider",
    "OpenAICompatibleProvider",
    "OpenAIProvider",
    "ProviderDescriptor",
    "ProviderRegistry",
    "create_provider_registry",
]
