# jobai/errors.py - 异常类型
from typing import Optional


class AiServiceError(RuntimeError):
    """AI 调用相关错误的基类"""


class ConfigError(AiServiceError, ValueError):
    """BASE_URL / API_KEY 等配置缺失或非法"""


class AiRequestError(AiServiceError):
    """非 200 响应（结构化错误），携带状态码与原始响应体"""

    def __init__(self, status_code: int, body: str, endpoint: str = ""):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"AI请求失败，状态码: {status_code}, 详情: {body}")


class AiTransportError(AiServiceError):
    """网络层错误（DNS、连接拒绝、超时），不做重试"""

    def __init__(self, endpoint: str, cause: BaseException):
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(f"调用AI服务异常: endpoint={endpoint}, cause={cause!r}")


class ResponseParseError(AiServiceError):
    """成功响应中无法解析出回复文本"""

    def __init__(self, body: str, reason: Optional[str] = None):
        self.body = body
        self.reason = reason
        msg = "AI响应解析失败"
        if reason:
            msg += f" ({reason})"
        super().__init__(f"{msg}, 原始响应: {body}")
