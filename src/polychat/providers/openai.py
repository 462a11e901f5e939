from .base import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI ChatGPT descriptor.

    Hidden design decisions:
    - Chat Completions endpoint URL
    - Default model
    - Fallback text when a reply carries no content
    """

    id = "openai"
    display_name = "OpenAI ChatGPT"
    endpoint = "https://api.openai.com/v1/chat/completions"
    default_model = "gpt-3.5-turbo"
    fallback_reply = "ERROR: No response"
