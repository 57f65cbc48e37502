"""问答服务集成层。

该包下的模块负责：
- 定义 ChatClient 抽象接口 (base)。
- 提供基于 httpx 的具体实现 (http_client)。
"""

from typing import Optional

from widget_core.config.settings import settings
from widget_core.providers.base import ChatClient
from widget_core.providers.http_client import HttpChatClient


def create_client(cfg: Optional[object] = None) -> ChatClient:
    """根据配置创建 ChatClient 实例，默认使用全局 settings。"""

    return HttpChatClient(cfg or settings)


__all__ = ["ChatClient", "HttpChatClient", "create_client"]
