import asyncio
import json

import httpx
import pytest

from widget_core.domain.exceptions import HttpError, MalformedResponseError, NetworkError
from widget_core.providers import create_client
from widget_core.providers.http_client import HttpChatClient


class SettingsStub:
    chatbot_api_url = "http://chat.test/"
    http_timeout = None


class Resp:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise json.JSONDecodeError("Expecting value", "<html>", 0)
        return self._payload


def fake_async_client(captured, response=None, error=None):
    class Client:
        def __init__(self, *a, **kw):
            captured["client_kwargs"] = kw

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, json=None, headers=None, **_):
            captured.update(url=url, json=json, headers=headers)
            if error is not None:
                raise error
            return response

    return Client


def test_ask_posts_message(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        "httpx.AsyncClient",
        fake_async_client(captured, response=Resp(payload={"response": "ok"})),
    )
    answer = asyncio.run(HttpChatClient(SettingsStub()).ask("hi"))
    assert answer == "ok"
    assert captured["url"] == "http://chat.test/api/chat"
    assert captured["json"] == {"message": "hi"}
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["client_kwargs"]["timeout"] is None


def test_ask_http_error(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        "httpx.AsyncClient",
        fake_async_client(captured, response=Resp(status_code=500, payload={"error": "boom"})),
    )
    with pytest.raises(HttpError) as exc_info:
        asyncio.run(HttpChatClient(SettingsStub()).ask("hi"))
    assert exc_info.value.http_status == 500
    assert exc_info.value.code == "HTTP_ERROR"


def test_ask_network_error(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        "httpx.AsyncClient",
        fake_async_client(captured, error=httpx.ConnectError("Connection refused")),
    )
    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(HttpChatClient(SettingsStub()).ask("hi"))
    assert exc_info.value.code == "NETWORK_ERROR"
    assert "Connection refused" in exc_info.value.message


@pytest.mark.parametrize(
    "resp",
    [
        Resp(payload={"answer": "wrong field"}),
        Resp(payload={"response": None}),
        Resp(payload=["response"]),
        Resp(invalid_json=True),
    ],
)
def test_ask_malformed_response(monkeypatch, resp):
    captured = {}
    monkeypatch.setattr("httpx.AsyncClient", fake_async_client(captured, response=resp))
    with pytest.raises(MalformedResponseError) as exc_info:
        asyncio.run(HttpChatClient(SettingsStub()).ask("hi"))
    assert exc_info.value.code == "MALFORMED_RESPONSE"


def test_ask_over_mock_transport(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "**Phishing** is a scam."})

    real_client = httpx.AsyncClient

    def client_factory(*a, **kw):
        return real_client(*a, transport=httpx.MockTransport(handler), **kw)

    monkeypatch.setattr("httpx.AsyncClient", client_factory)
    answer = asyncio.run(HttpChatClient(SettingsStub()).ask("What is phishing?"))
    assert answer == "**Phishing** is a scam."
    assert seen == {
        "method": "POST",
        "url": "http://chat.test/api/chat",
        "body": {"message": "What is phishing?"},
    }


def test_create_client_uses_settings():
    client = create_client(SettingsStub())
    assert isinstance(client, HttpChatClient)
    assert client.endpoint == "http://chat.test/api/chat"
