"""发送限流。

RateLimiter 只根据自身状态判断某个时刻能否发送，不了解消息或网络。
admit() 只读；只有调用方确认发送被接受后才调用 record() 更新时间。
"""

import math
from typing import Optional

from widget_core.domain.models import AdmitDecision

DEFAULT_MIN_INTERVAL_MS = 3000


class RateLimiter:
    def __init__(self, min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS):
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be >= 0")
        self.min_interval_ms = min_interval_ms
        self.last_accepted_at: Optional[float] = None

    def admit(self, now: float) -> AdmitDecision:
        """判断 now（毫秒）时刻是否允许发送。"""

        if self.last_accepted_at is None:
            return AdmitDecision(allowed=True)
        elapsed = now - self.last_accepted_at
        if elapsed < self.min_interval_ms:
            remaining = self.min_interval_ms - elapsed
            return AdmitDecision(allowed=False, wait_seconds=math.ceil(remaining / 1000))
        return AdmitDecision(allowed=True)

    def record(self, now: float) -> None:
        self.last_accepted_at = now
