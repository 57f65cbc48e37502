import dataclasses
from datetime import timezone

import pytest

from widget_core.domain.conversation import ConversationLog
from widget_core.domain.models import Sender, WidgetIntent, WidgetState, IntentKind, RequestState, WidgetPhase


def test_models_exist():
    state = WidgetState()
    assert state.phase is WidgetPhase.CLOSED
    assert state.request is RequestState.IDLE
    assert not state.busy
    assert not state.is_open
    assert WidgetState(request=RequestState.PENDING).busy
    intent = WidgetIntent.send("hi")
    assert intent.kind is IntentKind.SEND and intent.text == "hi"
    assert WidgetIntent.open_toggle().text is None


def test_log_appends_in_order():
    log = ConversationLog()
    first = log.append(Sender.USER, "hi")
    second = log.append(Sender.BOT, "hello")
    assert len(log) == 2
    assert [m.id for m in log] == [first.id, second.id]
    assert log.last() is second
    assert first.id.startswith("m-")
    assert first.created_at.tzinfo == timezone.utc
    assert first.created_at <= second.created_at


def test_log_renders_from_raw_text():
    log = ConversationLog()
    msg = log.append(Sender.BOT, "**x** <y>")
    assert msg.raw_text == "**x** <y>"
    assert msg.rendered_markup == "<strong>x</strong> &lt;y&gt;"


def test_message_is_immutable():
    log = ConversationLog()
    msg = log.append("system", "note")
    assert msg.sender is Sender.SYSTEM
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.rendered_markup = "<script>"


def test_messages_snapshot_is_not_live():
    log = ConversationLog()
    snapshot = log.messages
    log.append(Sender.USER, "later")
    assert snapshot == ()
    assert log.last() is not None
    assert ConversationLog().last() is None
