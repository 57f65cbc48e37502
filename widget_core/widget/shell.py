"""UI 外壳协议。

展示层（DOM、样式、图标）不在本包范围内，WidgetSession 只通过
WidgetShell 的三个回调向外报告变化：

- on_message_appended: 追加了一条消息（按追加顺序调用）。
- on_pending_changed: 显示/隐藏“正在输入”指示器。
- on_phase_changed: CLOSED / OPEN / OPEN_MAXIMIZED 切换。
"""

from typing import Protocol

from widget_core.domain.conversation import Message
from widget_core.domain.models import WidgetPhase


class WidgetShell(Protocol):
    def on_message_appended(self, message: Message) -> None:
        ...

    def on_pending_changed(self, pending: bool) -> None:
        ...

    def on_phase_changed(self, phase: WidgetPhase) -> None:
        ...


class NullShell:
    """不做任何展示的外壳，未提供 shell 时使用。"""

    def on_message_appended(self, message: Message) -> None:
        pass

    def on_pending_changed(self, pending: bool) -> None:
        pass

    def on_phase_changed(self, phase: WidgetPhase) -> None:
        pass
