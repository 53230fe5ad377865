# jobai/normalizer.py - 把两种响应结构统一成回复文本
from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from .endpoint import ApiShape
from .errors import ResponseParseError
from .utils import setup_logger, to_datetime

logger = setup_logger(__name__)


class NormalizedReply(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    text: str
    request_id: Optional[str] = None
    created_at: Optional[datetime] = None
    model_used: Optional[str] = None
    prompt_tokens: int = -1
    completion_tokens: int = -1
    total_tokens: int = -1
    # 为 None 表示走的主路径；否则记录使用了哪条兜底路径
    degraded: Optional[str] = None


def _token(usage: Dict[str, Any], *keys: str) -> int:
    for key in keys:
        value = usage.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return -1


def _chat_content(data: Any) -> str:
    """读取 choices[0].message.content，结构不符时抛 KeyError/TypeError/IndexError"""
    content = data["choices"][0]["message"]["content"]
    if not isinstance(content, str):
        raise TypeError(f"content 不是字符串: {type(content).__name__}")
    return content


def _output_items_text(data: Dict[str, Any]) -> str:
    """Responses API 原始结构：output[].content[] 中 type=output_text 的 text"""
    parts = []
    for item in data.get("output") or []:
        if not isinstance(item, dict):
            continue
        for c in item.get("content") or []:
            if isinstance(c, dict) and isinstance(c.get("text"), str):
                parts.append(c["text"])
    return "".join(parts)


def _telemetry(data: Dict[str, Any], timezone: str) -> Dict[str, Any]:
    usage = data.get("usage")
    if not isinstance(usage, dict):
        usage = {}
    created = data.get("created") or data.get("created_at")
    if not isinstance(created, (int, float)) or isinstance(created, bool):
        created = None
    request_id = data.get("id")
    model_used = data.get("model")
    return {
        "request_id": request_id if isinstance(request_id, str) else None,
        "created_at": to_datetime(created, timezone),
        "model_used": model_used if isinstance(model_used, str) else None,
        "prompt_tokens": _token(usage, "prompt_tokens", "input_tokens"),
        "completion_tokens": _token(usage, "completion_tokens", "output_tokens"),
        "total_tokens": _token(usage, "total_tokens"),
    }


def _normalize_responses(raw_body: str, data: Any, timezone: str) -> NormalizedReply:
    if not isinstance(data, dict):
        logger.warning("⚠️ Responses 响应不是 JSON 对象，直接返回原始响应体")
        return NormalizedReply(text=raw_body, created_at=to_datetime(None, timezone),
                               degraded="raw_body")

    meta = _telemetry(data, timezone)

    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text:
        return NormalizedReply(text=output_text, **meta)

    text = _output_items_text(data)
    if text:
        logger.warning("⚠️ 缺少 output_text，改从 output[].content 读取")
        return NormalizedReply(text=text, degraded="output_items", **meta)

    # 部分代理/兼容层在 /responses 上仍返回 choices/message 结构
    try:
        text = _chat_content(data)
    except (KeyError, IndexError, TypeError):
        text = ""
    if text:
        logger.warning("⚠️ 缺少 output_text，改从 choices[0].message.content 读取")
        return NormalizedReply(text=text, degraded="chat_choices", **meta)

    logger.warning(f"⚠️ 无法解析 Responses 响应，返回原始响应体: {raw_body}")
    return NormalizedReply(text=raw_body, degraded="raw_body", **meta)


def normalize(shape: ApiShape, raw_body: str, timezone: str = "Asia/Shanghai") -> NormalizedReply:
    try:
        data = json.loads(raw_body)
    except (TypeError, ValueError):
        data = None
        if shape is ApiShape.CHAT_COMPLETIONS:
            raise ResponseParseError(raw_body, "响应不是合法 JSON")

    if shape is ApiShape.RESPONSES:
        return _normalize_responses(raw_body, data, timezone)

    try:
        text = _chat_content(data)
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseParseError(raw_body, f"缺少 choices[0].message.content: {e!r}") from e

    return NormalizedReply(text=text, **_telemetry(data, timezone))
