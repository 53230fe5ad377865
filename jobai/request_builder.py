# jobai/request_builder.py - 请求体与请求头
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .endpoint import ApiShape

DEFAULT_TEMPERATURE = 0.5


class RequestSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    shape: ApiShape
    endpoint: str
    model: Optional[str] = None
    prompt_text: str
    temperature: float = DEFAULT_TEMPERATURE


def build_body(spec: RequestSpec) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": spec.model,
        "temperature": spec.temperature,
    }
    if spec.shape is ApiShape.RESPONSES:
        # Responses API 采用 input 字段
        body["input"] = spec.prompt_text
    else:
        body["messages"] = [{"role": "user", "content": spec.prompt_text}]
    return body


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {api_key}",
        # Azure OpenAI 等服务读取 api-key 头
        "api-key": api_key,
    }


def build(
    shape: ApiShape,
    endpoint: str,
    model: Optional[str],
    prompt_text: str,
    api_key: str,
    temperature: float = DEFAULT_TEMPERATURE,
) -> Tuple[RequestSpec, Dict[str, Any], Dict[str, str]]:
    spec = RequestSpec(
        shape=shape,
        endpoint=endpoint,
        model=model,
        prompt_text=prompt_text,
        temperature=temperature,
    )
    return spec, build_body(spec), build_headers(api_key)
