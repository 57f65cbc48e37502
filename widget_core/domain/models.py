"""Widget 内部共享的领域数据结构。

- Sender: 消息发送方（user/bot/system）。
- WidgetPhase / RequestState: 组件可见性状态与请求状态。
- WidgetState: 两者组合后的只读快照，供 UI 层读取。
- IntentKind / WidgetIntent: UI 层投递给 WidgetSession 的用户意图。
- AdmitDecision: RateLimiter 的放行/拒绝结论。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


class WidgetPhase(str, Enum):
    """组件可见性阶段，初始为 CLOSED。"""

    CLOSED = "closed"
    OPEN = "open"
    OPEN_MAXIMIZED = "open_maximized"


class RequestState(str, Enum):
    """请求状态。PENDING 期间最多只有一次交换在途，新的发送会被拒绝。"""

    IDLE = "idle"
    PENDING = "pending"


@dataclass(frozen=True)
class WidgetState:
    phase: WidgetPhase = WidgetPhase.CLOSED
    request: RequestState = RequestState.IDLE

    @property
    def busy(self) -> bool:
        return self.request is RequestState.PENDING

    @property
    def is_open(self) -> bool:
        return self.phase is not WidgetPhase.CLOSED


class IntentKind(str, Enum):
    OPEN_TOGGLE = "open-toggle"
    MAXIMIZE_TOGGLE = "maximize-toggle"
    SEND = "send"


@dataclass(frozen=True)
class WidgetIntent:
    """UI 层产生的一次用户意图，仅 SEND 需要携带 text。"""

    kind: IntentKind
    text: Optional[str] = None

    @classmethod
    def open_toggle(cls) -> "WidgetIntent":
        return cls(kind=IntentKind.OPEN_TOGGLE)

    @classmethod
    def maximize_toggle(cls) -> "WidgetIntent":
        return cls(kind=IntentKind.MAXIMIZE_TOGGLE)

    @classmethod
    def send(cls, text: str) -> "WidgetIntent":
        return cls(kind=IntentKind.SEND, text=text)


@dataclass(frozen=True)
class AdmitDecision:
    """限流判定结果。

    - allowed: 是否允许本次发送。
    - wait_seconds: 被拒绝时需要等待的整秒数（向上取整，>= 1）。
    """

    allowed: bool
    wait_seconds: int = 0
