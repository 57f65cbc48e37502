"""统一业务异常模型。

ChatClient 在一次请求/响应交换中遇到的所有失败都以 BusinessError
子类抛出，由 WidgetSession 在编排边界统一捕获并记录 code，
最终只向用户展示一条通用的兜底提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 诊断用错误信息，不直接展示给用户。
        http_status: 对应的 HTTP 状态码，默认 400。
        extra: 其他补充字段（例如 url、body 预览等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """传输层错误，例如连接被拒绝、DNS 解析失败等。"""


class HttpError(BusinessError):
    """服务端返回了非 2xx 状态码。"""


class MalformedResponseError(BusinessError):
    """状态码成功，但响应体缺少 response 字段或不是合法 JSON。"""
