"""jobai - 可配置的 OpenAI 兼容 AI 请求适配器"""

from .errors import (
    AiRequestError,
    AiServiceError,
    AiTransportError,
    ConfigError,
    ResponseParseError,
)
from .llm_client import LLMClient

__all__ = [
    "LLMClient",
    "AiServiceError",
    "AiRequestError",
    "AiTransportError",
    "ConfigError",
    "ResponseParseError",
]
