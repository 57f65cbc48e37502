import asyncio

from widget_core.api.service import create_session, export_messages, session_snapshot
from widget_core.providers.http_client import HttpChatClient


class DummySettings:
    chatbot_api_url = "http://chat.test"
    http_timeout = None
    min_request_interval_ms = 3000
    welcome_text = "Welcome"


class FakeClient:
    name = "fake"

    async def ask(self, text):
        return f"*{text}*"


def test_create_session_default_client():
    session = create_session(cfg=DummySettings())
    assert isinstance(session._client, HttpChatClient)
    assert session._client.endpoint == "http://chat.test/api/chat"
    assert session.rate_limiter.min_interval_ms == 3000


def test_export_messages():
    session = create_session(client=FakeClient(), cfg=DummySettings())
    session.toggle_open()
    asyncio.run(session.send("echo"))
    exported = export_messages(session)
    assert [m["sender"] for m in exported] == ["user", "bot"]
    assert exported[1]["raw_text"] == "*echo*"
    assert exported[1]["rendered_markup"] == "<em>echo</em>"
    assert exported[0]["id"].startswith("m-")


def test_session_snapshot():
    session = create_session(client=FakeClient(), cfg=DummySettings())
    snap = session_snapshot(session)
    assert snap == {
        "phase": "closed",
        "busy": False,
        "welcome_markup": "Welcome",
        "messages": [],
    }
