from .base import OpenAICompatibleProvider


class DeepSeekProvider(OpenAICompatibleProvider):
    """DeepSeek descriptor using the OpenAI-compatible API.

    Hidden design decisions:
    - DeepSeek endpoint URL
    - Default model ('deepseek-chat')
    - Localized fallback text when a reply carries no content
    """

    id = "deepseek"
    display_name = "DeepSeek"
    endpoint = "https://api.deepseek.com/v1/chat/completions"
    default_model = "deepseek-chat"
    fallback_reply = "无响应"
