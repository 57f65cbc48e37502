"""Widget Core 顶层包。

该包提供可嵌入聊天组件的客户端交互核心，
包括可见性状态机、限流的请求管线、对外部问答服务的 HTTP 调用，
以及先转义再格式化的 markdown-lite 渲染。
"""

from widget_core.api.service import create_session
from widget_core.domain.models import IntentKind, Sender, WidgetIntent, WidgetPhase
from widget_core.widget.session import WidgetSession

__all__ = ["IntentKind", "Sender", "WidgetIntent", "WidgetPhase", "WidgetSession", "create_session"]
