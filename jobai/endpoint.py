# jobai/endpoint.py - 端点选择
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class ApiShape(str, Enum):
    CHAT_COMPLETIONS = "chat_completions"
    RESPONSES = "responses"

    @property
    def path(self) -> str:
        return "/responses" if self is ApiShape.RESPONSES else "/chat/completions"


# 需要走 Responses API 的模型名片段（o 系列、4.1、reasoner 等）。
# 只是经验白名单，不是完整分类器；新模型需要在这里补充。
RESPONSES_MODEL_MARKERS: Tuple[str, ...] = (
    "o1", "o3", "o4", "4.1", "reasoner", "4o-mini", "gpt-4o-mini",
)


def normalize_base_url(base_url: Optional[str]) -> str:
    if base_url is None:
        return ""
    trimmed = base_url.strip()
    return trimmed[:-1] if trimmed.endswith("/") else trimmed


def is_responses_model(model: Optional[str]) -> bool:
    """粗略识别需要使用 Responses API 的模型"""
    if not model:
        return False
    m = model.lower()
    return any(marker in m for marker in RESPONSES_MODEL_MARKERS)


def build_endpoint(base_url: Optional[str], shape: ApiShape) -> str:
    """拼接完整端点；base_url 已带 /v1 时不再重复拼接"""
    normalized = normalize_base_url(base_url)
    if normalized.endswith("/v1") or "/v1/" in normalized:
        return normalized + shape.path
    return normalized + "/v1" + shape.path


def select_shape(model: Optional[str]) -> ApiShape:
    return ApiShape.RESPONSES if is_responses_model(model) else ApiShape.CHAT_COMPLETIONS


def resolve(base_url: Optional[str], model: Optional[str]) -> Tuple[ApiShape, str]:
    shape = select_shape(model)
    return shape, build_endpoint(base_url, shape)
