"""组件状态机、限流器与 UI 外壳协议。"""

from widget_core.widget.rate_limiter import RateLimiter
from widget_core.widget.session import FALLBACK_MESSAGE, RATE_LIMIT_MESSAGE, WidgetSession
from widget_core.widget.shell import NullShell, WidgetShell

__all__ = [
    "FALLBACK_MESSAGE",
    "NullShell",
    "RATE_LIMIT_MESSAGE",
    "RateLimiter",
    "WidgetSession",
    "WidgetShell",
]
