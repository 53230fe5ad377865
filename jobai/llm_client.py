# jobai/llm_client.py

from __future__ import annotations
from typing import Optional, Protocol, Tuple
from . import dispatcher
from .config import API_KEY, BASE_URL, MODEL
from .endpoint import ApiShape, build_endpoint, resolve
from .errors import AiRequestError, AiTransportError, ConfigError, ResponseParseError
from .normalizer import NormalizedReply, normalize
from .request_builder import DEFAULT_TEMPERATURE, build
from .utils import TIME_FORMAT, setup_logger

logger = setup_logger(__name__)


class ConfigProvider(Protocol):
    def get(self, key: str) -> Optional[str]: ...


def contains_reasoning_param_error(body: Optional[str]) -> bool:
    """错误响应中是否包含 reasoning 相关参数错误（如 reasoning.summary unsupported_value）"""
    if body is None:
        return False
    s = body.lower()
    return ("reasoning" in s and "unsupported_value" in s) or "reasoning.summary" in s


class LLMClient:
    """
    每次调用时从 provider 读取 BASE_URL / API_KEY / MODEL，
    按模型选择 Chat Completions 或 Responses 端点发起请求。
    """

    def __init__(
        self,
        provider: ConfigProvider,
        timeout: float = dispatcher.DEFAULT_TIMEOUT,
        read_timeout: Optional[float] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        timezone: str = "Asia/Shanghai",
    ) -> None:
        self.provider = provider
        self.timeout = timeout
        self.read_timeout = read_timeout
        self.temperature = temperature
        self.timezone = timezone

    # ------------------------------------------------------------------
    # 配置：每次调用实时读取，不做缓存
    # ------------------------------------------------------------------
    def _load_settings(self) -> Tuple[str, str, Optional[str]]:
        base_url = self.provider.get(BASE_URL)
        api_key = self.provider.get(API_KEY)
        model = self.provider.get(MODEL)

        if not base_url or not base_url.strip():
            raise ConfigError("BASE_URL 未设置")
        if not api_key or not api_key.strip():
            raise ConfigError("API_KEY 未设置")
        if not model:
            logger.warning("MODEL 未设置，按 Chat Completions 处理")
        return base_url, api_key, model

    # ------------------------------------------------------------------
    # 单次请求：构建 → 发送 → 返回 (shape, endpoint, outcome)
    # ------------------------------------------------------------------
    def _attempt(self, shape: ApiShape, endpoint: str, model: Optional[str], api_key: str,
                 prompt: str) -> dispatcher.CallOutcome:
        spec, body, headers = build(
            shape, endpoint, model, prompt, api_key, temperature=self.temperature
        )
        logger.debug(f"发送AI请求: shape={spec.shape.value}, endpoint={spec.endpoint}")
        return dispatcher.send(
            spec.endpoint, body, headers,
            timeout=self.timeout, read_timeout=self.read_timeout,
        )

    def _finish(self, shape: ApiShape, endpoint: str,
                outcome: dispatcher.CallOutcome) -> NormalizedReply:
        if isinstance(outcome, dispatcher.TransportFailure):
            raise AiTransportError(endpoint, outcome.cause) from outcome.cause
        if isinstance(outcome, dispatcher.StructuredError):
            raise AiRequestError(outcome.status_code, outcome.body, endpoint)

        try:
            reply = normalize(shape, outcome.body, self.timezone)
        except ResponseParseError:
            logger.error(f"AI响应解析失败: endpoint={endpoint}, body={outcome.body}")
            raise
        created = reply.created_at.strftime(TIME_FORMAT) if reply.created_at else "-"
        logger.info(
            f"AI响应: id={reply.request_id}, time={created}, model={reply.model_used}, "
            f"promptTokens={reply.prompt_tokens}, completionTokens={reply.completion_tokens}, "
            f"totalTokens={reply.total_tokens}"
        )
        return reply

    # ------------------------------------------------------------------
    # 主接口
    # ------------------------------------------------------------------
    def ask(self, prompt: str) -> NormalizedReply:
        """发送 AI 请求（非流式），返回完整的归一化结果"""
        base_url, api_key, model = self._load_settings()
        shape, endpoint = resolve(base_url, model)

        outcome = self._attempt(shape, endpoint, model, api_key, prompt)

        # Responses-only 模型误用 Chat Completions 时，自动切换重试一次
        if (
            shape is ApiShape.CHAT_COMPLETIONS
            and isinstance(outcome, dispatcher.StructuredError)
            and contains_reasoning_param_error(outcome.body)
        ):
            shape = ApiShape.RESPONSES
            endpoint = build_endpoint(base_url, shape)
            logger.warning(f"检测到 reasoning 相关参数错误，自动切换到 Responses API 重试: {endpoint}")
            outcome = self._attempt(shape, endpoint, model, api_key, prompt)

        return self._finish(shape, endpoint, outcome)

    def ask_llm(self, prompt: str) -> str:
        return self.ask(prompt).text
