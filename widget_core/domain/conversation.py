from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple
from uuid import uuid4

from widget_core.domain.models import Sender
from widget_core.rendering import render_message


@dataclass(frozen=True)
class Message:
    id: str
    sender: Sender
    raw_text: str
    rendered_markup: str
    created_at: datetime


class ConversationLog:
    """只追加的消息记录，插入顺序即显示顺序与因果顺序。

    Message 只能通过 append() 产生，rendered_markup 总是由 raw_text
    经 escape -> render 推导而来，不接受外部传入的标记。
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, sender: Sender, raw_text: str) -> Message:
        message = Message(
            id=f"m-{uuid4().hex}",
            sender=Sender(sender),
            raw_text=raw_text,
            rendered_markup=render_message(raw_text),
            created_at=datetime.now(timezone.utc),
        )
        self._messages.append(message)
        return message

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)
