"""问答服务 HTTP 适配器。

- URL: {chatbot_api_url}/api/chat
- 请求: POST，Content-Type: application/json，body {"message": text}
- 成功: 2xx 且 body 为 {"response": "<answer>"}

不做重试；超时取 settings.http_timeout（默认 None，即不设超时）。
"""

from typing import Any

import httpx

from widget_core.config.settings import settings
from widget_core.domain.exceptions import HttpError, MalformedResponseError, NetworkError

CHAT_PATH = "/api/chat"


class HttpChatClient:
    """基于 httpx.AsyncClient 的 ChatClient 实现。"""

    name = "http"

    def __init__(self, cfg=settings):
        self._settings = cfg

    @property
    def endpoint(self) -> str:
        base = (getattr(self._settings, "chatbot_api_url", None) or "").rstrip("/")
        return f"{base}{CHAT_PATH}"

    async def ask(self, text: str) -> str:
        url = self.endpoint
        try:
            async with httpx.AsyncClient(
                timeout=getattr(self._settings, "http_timeout", None),
                trust_env=False,
            ) as client:
                resp = await client.post(
                    url,
                    json={"message": text},
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            # 网络错误：连接被拒绝、DNS 失败等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, url=url)
        if not 200 <= resp.status_code < 300:
            raise HttpError(
                code="HTTP_ERROR",
                message=f"Chat service returned HTTP {resp.status_code}",
                http_status=resp.status_code,
                url=url,
            )
        return self._parse_answer(resp)

    @staticmethod
    def _parse_answer(resp: Any) -> str:
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Response body is not JSON: {e}",
                http_status=resp.status_code,
            )
        answer = data.get("response") if isinstance(data, dict) else None
        if not isinstance(answer, str):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Response body lacks a string 'response' field",
                http_status=resp.status_code,
            )
        return answer
