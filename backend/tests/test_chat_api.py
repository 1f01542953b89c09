from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient

from assistant_core.knowledge import WELCOME_MESSAGE
from chat_memory import MAX_HISTORY, Message


def _chat(client, message, conversation_id: str | None = "conv-1", **extra):
    payload = {"message": message, **extra}
    if conversation_id is not None:
        payload["conversationId"] = conversation_id
    return client.post("/chat", json=payload)


def test_navigation_request_returns_navigation_action(client):
    response = _chat(client, "go to dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["role"] == "assistant"
    assert body["data"]["navigationAction"] == {"type": "navigate", "target": "dashboard"}
    datetime.fromisoformat(body["data"]["timestamp"])


def test_greeting_in_the_morning(client, backend_module, fixed_clock):
    backend_module.container.engine.composer.clock = fixed_clock(9)

    response = _chat(client, "hi", conversation_id=None)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["content"].startswith("Good morning!")
    assert "navigationAction" not in data
    history = backend_module.container.store.get("default-conversation")
    assert [message.role for message in history] == ["user", "assistant"]


def test_fallback_reply_without_network_providers(client):
    response = _chat(client, "troponin elevated, how should I interpret it")
    assert response.status_code == 200
    assert "troponin" in response.json()["data"]["content"]


def test_history_is_bounded_to_most_recent_messages(client, backend_module):
    store = backend_module.container.store
    for index in range(MAX_HISTORY + 1):
        store.append("bounded", Message(role="user", content=f"message {index}"))

    response = client.get("/conversation/bounded")

    data = response.json()["data"]
    assert len(data) == MAX_HISTORY
    assert data[0]["content"] == "message 1"
    assert all(item["content"] != "message 0" for item in data)
    timestamps = [datetime.fromisoformat(item["timestamp"]) for item in data]
    assert timestamps == sorted(timestamps)


def test_history_stays_bounded_when_driven_through_chat(client):
    for index in range(51):
        response = _chat(client, f"note number {index}", conversation_id="c1")
        assert response.status_code == 200

    data = client.get("/conversation/c1").json()["data"]

    assert len(data) == MAX_HISTORY
    contents = [item["content"] for item in data]
    assert "note number 0" not in contents
    assert contents[0] == "note number 26"
    assert contents[-2] == "note number 50"
    assert [item["role"] for item in data] == ["user", "assistant"] * (MAX_HISTORY // 2)


def test_get_seeds_welcome_message_once(client):
    first = client.get("/conversation/fresh")
    second = client.get("/conversation/fresh")

    assert first.status_code == 200
    assert [item["content"] for item in first.json()["data"]] == [WELCOME_MESSAGE]
    assert len(second.json()["data"]) == 1


def test_get_returns_existing_turns(client):
    _chat(client, "go to settings", conversation_id="turns")

    data = client.get("/conversation/turns").json()["data"]

    assert [item["role"] for item in data] == ["user", "assistant"]
    assert data[0]["content"] == "go to settings"
    assert data[1]["navigationAction"]["target"] == "settings"


def test_delete_clears_conversation(client, backend_module):
    _chat(client, "hello", conversation_id="to-clear")

    response = client.delete("/conversation/to-clear")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Conversation cleared successfully"}
    assert backend_module.container.store.get("to-clear") == []


def test_missing_message_is_rejected(client):
    response = client.post("/chat", json={"conversationId": "conv-1"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Message is required"}


def test_blank_message_is_rejected(client, backend_module):
    response = _chat(client, "   ")
    assert response.status_code == 400
    assert backend_module.container.store.get("conv-1") == []


def test_non_string_message_is_rejected(client):
    response = client.post("/chat", json={"message": {"text": "hi"}})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_overlong_conversation_id_is_rejected(client):
    response = _chat(client, "hello", conversation_id="x" * 200)
    assert response.status_code == 400


def test_routes_are_also_mounted_under_chatbot_prefix(client):
    response = client.post("/api/chatbot/chat", json={"message": "take me to the lab reports page", "conversationId": "p"})
    assert response.json()["data"]["navigationAction"]["target"] == "labReports"

    history = client.get("/api/chatbot/conversation/p").json()["data"]
    assert len(history) == 2


def test_health_reports_configured_providers(client):
    _chat(client, "hello", conversation_id="health")
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["providers"] == ["rules"]
    assert body["conversations"] >= 1


def test_unexpected_errors_return_polite_500(backend_module, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("store offline")

    monkeypatch.setattr(backend_module.container.engine, "respond", _boom)
    with TestClient(backend_module.app, raise_server_exceptions=False) as test_client:
        response = test_client.post("/chat", json={"message": "hello"})

    assert response.status_code == 500
    assert response.json()["success"] is False
