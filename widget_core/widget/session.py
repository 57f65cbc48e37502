"""WidgetSession：组件状态机与发送编排。

一个 WidgetSession 对应页面上的一个嵌入实例，独占自己的 WidgetState、
RateLimiter 与 ConversationLog。所有状态变更都在同一个事件循环上完成，
唯一的挂起点是 send() 中等待 ChatClient.ask 的那一步；等待期间仍可
打开/关闭/最大化，只有新的 send 会被拒绝（不排队）。
"""

import logging
import time
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from widget_core.config.settings import settings
from widget_core.domain.conversation import ConversationLog, Message
from widget_core.domain.exceptions import BusinessError
from widget_core.domain.models import (
    IntentKind,
    RequestState,
    Sender,
    WidgetIntent,
    WidgetPhase,
    WidgetState,
)
from widget_core.infrastructure.logging.logger import logger
from widget_core.providers.base import ChatClient
from widget_core.rendering import render_message
from widget_core.widget.rate_limiter import RateLimiter
from widget_core.widget.shell import NullShell, WidgetShell

RATE_LIMIT_MESSAGE = "Please wait {seconds} second(s) before sending another message to avoid rate limits."
FALLBACK_MESSAGE = "Sorry, I encountered an error. Please try again."


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class WidgetSession:
    def __init__(
        self,
        client: ChatClient,
        shell: Optional[WidgetShell] = None,
        *,
        min_interval_ms: Optional[int] = None,
        clock: Callable[[], float] = monotonic_ms,
        cfg=settings,
    ):
        """初始化会话。

        Args:
            client: ChatClient 实现
            shell: UI 外壳回调（可选，缺省为 NullShell）
            min_interval_ms: 发送最小间隔，缺省取配置
            clock: 返回当前毫秒时间的函数，测试中可注入
            cfg: 配置对象
        """
        self._client = client
        self._shell = shell or NullShell()
        self._clock = clock
        self._settings = cfg
        if min_interval_ms is None:
            min_interval_ms = getattr(cfg, "min_request_interval_ms", 3000)
        self._limiter = RateLimiter(min_interval_ms)
        self._log_store = ConversationLog()
        self._state = WidgetState()
        self._log_ctx: Dict[str, Any] = {"session_id": f"ws-{uuid4().hex}"}

    # ---- 只读访问 ----

    @property
    def state(self) -> WidgetState:
        return self._state

    @property
    def phase(self) -> WidgetPhase:
        return self._state.phase

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def log(self) -> ConversationLog:
        return self._log_store

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._limiter

    @property
    def welcome_markup(self) -> str:
        return render_message(getattr(self._settings, "welcome_text", "") or "")

    # ---- 意图分发 ----

    async def dispatch(self, intent: WidgetIntent) -> Optional[Message]:
        """消费一次 UI 意图。只有 SEND 会返回回复消息。"""

        if intent.kind is IntentKind.OPEN_TOGGLE:
            self.toggle_open()
            return None
        if intent.kind is IntentKind.MAXIMIZE_TOGGLE:
            self.toggle_maximize()
            return None
        if intent.kind is IntentKind.SEND:
            return await self.send(intent.text or "")
        raise ValueError(f"Unknown intent: {intent.kind!r}")

    # ---- 状态机 ----

    def toggle_open(self) -> WidgetPhase:
        if self._state.phase is WidgetPhase.CLOSED:
            self._set_phase(WidgetPhase.OPEN)
            return self._state.phase
        # 关闭前先退出最大化，最大化状态不能跨越一次关闭
        if self._state.phase is WidgetPhase.OPEN_MAXIMIZED:
            self._set_phase(WidgetPhase.OPEN)
        self._set_phase(WidgetPhase.CLOSED)
        return self._state.phase

    def toggle_maximize(self) -> WidgetPhase:
        phase = self._state.phase
        if phase is WidgetPhase.CLOSED:
            self._log(logging.INFO, "Ignored maximize toggle while closed")
        elif phase is WidgetPhase.OPEN:
            self._set_phase(WidgetPhase.OPEN_MAXIMIZED)
        else:
            self._set_phase(WidgetPhase.OPEN)
        return self._state.phase

    # ---- 发送 ----

    async def send(self, raw_text: str) -> Optional[Message]:
        """发送一行用户输入，返回追加的回复消息（bot 或 system）。

        以下情况直接返回 None、不产生任何副作用：文本去空白后为空、
        组件处于关闭状态、已有请求在途。被限流时追加一条等待提示并返回它。
        """
        text = (raw_text or "").strip()
        if not text:
            return None
        if self._state.phase is WidgetPhase.CLOSED:
            self._log(logging.INFO, "Ignored send while closed")
            return None
        if self._state.busy:
            self._log(logging.INFO, "Rejected send while pending")
            return None

        now = self._clock()
        decision = self._limiter.admit(now)
        if not decision.allowed:
            self._log(logging.INFO, "Send rate limited", wait_seconds=decision.wait_seconds)
            return self._append(Sender.SYSTEM, RATE_LIMIT_MESSAGE.format(seconds=decision.wait_seconds))

        self._limiter.record(now)
        user_msg = self._append(Sender.USER, text)
        self._set_request_state(RequestState.PENDING)
        self._log(logging.INFO, "Accepted send", message_id=user_msg.id)

        start_time = time.time()
        answer: Optional[str] = None
        try:
            answer = await self._client.ask(text)
        except BusinessError as e:
            self._log(
                logging.ERROR,
                "Chat exchange failed",
                failure=e.code,
                http_status=e.http_status,
                error=e.message,
            )
        except Exception:
            logger.exception("Unexpected chat client failure", extra={"extra": dict(self._log_ctx)})
        finally:
            self._set_request_state(RequestState.IDLE)

        elapsed = round(time.time() - start_time, 2)
        if answer is None:
            return self._append(Sender.SYSTEM, FALLBACK_MESSAGE)
        reply = self._append(Sender.BOT, answer)
        self._log(logging.INFO, "Received reply", message_id=reply.id, elapsed_seconds=elapsed)
        return reply

    # ---- 辅助方法 ----

    def _append(self, sender: Sender, raw_text: str) -> Message:
        # 关闭状态下也照常追加，重新打开时会话保持一致
        message = self._log_store.append(sender, raw_text)
        self._shell.on_message_appended(message)
        return message

    def _set_phase(self, phase: WidgetPhase) -> None:
        previous = self._state.phase
        self._state = WidgetState(phase=phase, request=self._state.request)
        self._log(logging.INFO, "Phase changed", previous=previous.value, phase=phase.value)
        self._shell.on_phase_changed(phase)

    def _set_request_state(self, request: RequestState) -> None:
        self._state = WidgetState(phase=self._state.phase, request=request)
        self._shell.on_pending_changed(request is RequestState.PENDING)

    def _log(self, level: int, message: str, **fields: Any) -> None:
        payload = dict(self._log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
