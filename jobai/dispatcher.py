# jobai/dispatcher.py - 发送 HTTP 请求并对结果分类
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from .utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class Success:
    body: str
    status_code: int = 200


@dataclass(frozen=True)
class StructuredError:
    status_code: int
    body: str


@dataclass(frozen=True)
class TransportFailure:
    cause: Exception


CallOutcome = Union[Success, StructuredError, TransportFailure]


def send(
    endpoint: str,
    body: Dict[str, Any],
    headers: Dict[str, str],
    timeout: float = DEFAULT_TIMEOUT,
    read_timeout: Optional[float] = None,
) -> CallOutcome:
    """单次阻塞 POST，不做任何重试；timeout 为连接超时"""
    try:
        response = requests.post(
            endpoint,
            json=body,
            headers=headers,
            timeout=(timeout, read_timeout),
        )
    except requests.RequestException as e:
        logger.error(f"调用AI服务异常: endpoint={endpoint}, error={e}")
        return TransportFailure(e)

    if response.status_code == 200:
        return Success(response.text, 200)

    logger.error(
        f"AI请求失败: status={response.status_code}, endpoint={endpoint}, body={response.text}"
    )
    return StructuredError(response.status_code, response.text)
