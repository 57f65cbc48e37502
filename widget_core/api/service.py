"""对外 API 服务模块。

提供简化的函数接口供 UI 外壳调用。不持有任何全局会话，
调用方拿到 WidgetSession 句柄后自行保存。
"""

from typing import Any, Dict, List, Optional

from widget_core.config.settings import settings
from widget_core.infrastructure.logging.logger import logger
from widget_core.providers import create_client
from widget_core.providers.base import ChatClient
from widget_core.widget.session import WidgetSession
from widget_core.widget.shell import WidgetShell


def create_session(
    shell: Optional[WidgetShell] = None,
    client: Optional[ChatClient] = None,
    cfg=None,
) -> WidgetSession:
    """创建一个接好 HTTP 客户端的 WidgetSession。

    Args:
        shell: UI 外壳回调（可选）
        client: 自定义 ChatClient（可选，缺省按配置创建 HttpChatClient）
        cfg: 配置对象（可选，缺省为全局 settings）

    Returns:
        新的 WidgetSession 实例
    """
    cfg = cfg or settings
    session = WidgetSession(client=client or create_client(cfg), shell=shell, cfg=cfg)
    logger.info(
        "Created widget session",
        extra={"extra": {"api_url": getattr(cfg, "chatbot_api_url", None)}},
    )
    return session


def export_messages(session: WidgetSession) -> List[Dict[str, Any]]:
    """导出会话中的全部消息。

    Returns:
        消息列表，每项包含 id, sender, raw_text, rendered_markup, created_at
    """
    return [
        {
            "id": m.id,
            "sender": m.sender.value,
            "raw_text": m.raw_text,
            "rendered_markup": m.rendered_markup,
            "created_at": m.created_at.isoformat(),
        }
        for m in session.log
    ]


def session_snapshot(session: WidgetSession) -> Dict[str, Any]:
    """返回当前状态快照，便于外壳在重新挂载时恢复界面。"""
    return {
        "phase": session.phase.value,
        "busy": session.busy,
        "welcome_markup": session.welcome_markup,
        "messages": export_messages(session),
    }
