from arkwork.config import Settings
from arkwork.core.chat_service import ChatService
from arkwork.llm.gemini_client import ProviderError
from arkwork.models.chat import ChatRequest
from arkwork.prompts.fallback_prompt import GREETING_MESSAGE


def test_round_trip_minimal_request(client, fake_gemini):
    resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hello"}]})
    assert resp.status_code == 200
    assert resp.json() == {"answer": "hi there"}
    assert len(fake_gemini.calls) == 1
    assert fake_gemini.calls[0].user_message == "hello"


def test_answer_is_trimmed(settings, make_client, make_gemini):
    client = make_client(settings, gemini=make_gemini(reply="  jawaban  \n"))
    resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert resp.json() == {"answer": "jawaban"}


def test_missing_messages_is_bad_request_without_upstream_call(client, fake_gemini):
    for body in ({}, {"messages": []}):
        resp = client.post("/api/chat", json=body)
        assert resp.status_code == 400
        payload = resp.json()
        assert payload["error"] == "BAD_REQUEST"
        assert any(d["field"] == "messages" for d in payload["details"])
    assert fake_gemini.calls == []


def test_empty_body_is_bad_request(client, fake_gemini):
    resp = client.post("/api/chat", content=b"", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "BAD_REQUEST"
    assert fake_gemini.calls == []


def test_invalid_json_is_bad_request(client, fake_gemini):
    resp = client.post("/api/chat", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "BAD_REQUEST"
    assert fake_gemini.calls == []


def test_unknown_intent_is_bad_request(client, fake_gemini):
    resp = client.post("/api/chat", json={"messages": [{"content": "hi"}], "intent": "sports"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "BAD_REQUEST"
    assert fake_gemini.calls == []


def test_generation_parameter_bounds_are_bad_request(client, fake_gemini):
    bodies = [
        {"messages": [{"content": "hi"}], "maxOutputTokens": 10},
        {"messages": [{"content": "hi"}], "maxOutputTokens": 4096},
        {"messages": [{"content": "hi"}], "temperature": 1.5},
        {"messages": [{"content": "hi"}], "temperature": -1},
    ]
    for body in bodies:
        resp = client.post("/api/chat", json=body)
        assert resp.status_code == 400, body
    assert fake_gemini.calls == []


def test_blank_latest_message_returns_greeting_without_upstream_call(client, fake_gemini):
    resp = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "earlier"}, {"role": "user", "content": "   "}]},
    )
    assert resp.status_code == 200
    assert resp.json() == {"answer": GREETING_MESSAGE}
    assert len(fake_gemini.calls) == 0


def test_missing_key_is_service_unavailable(make_client, make_gemini):
    gemini = make_gemini()
    client = make_client(Settings(gemini_api_key=""), gemini=gemini)
    resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert resp.status_code == 503
    payload = resp.json()
    assert payload["error"] == "GEMINI_API_KEY_MISSING"
    assert payload["message"]
    assert gemini.calls == []


def test_empty_provider_text_is_bad_gateway(settings, make_client, make_gemini):
    for reply in ("", "   \n"):
        client = make_client(settings, gemini=make_gemini(reply=reply))
        resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
        assert resp.status_code == 502
        assert resp.json()["error"] == "EMPTY_RESPONSE"


def test_provider_error_body_is_minimal(settings, make_client, make_gemini):
    error = ProviderError("Resource has been exhausted", code=429, status="RESOURCE_EXHAUSTED", name="ClientError")
    client = make_client(settings, gemini=make_gemini(error=error))
    resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert resp.status_code == 502
    assert resp.json() == {"error": "AI_ERROR", "code": 429, "message": "Resource has been exhausted"}


def test_provider_error_falls_back_to_status_and_omits_missing_code(settings, make_client, make_gemini):
    client = make_client(settings, gemini=make_gemini(error=ProviderError("boom", status="UNAVAILABLE")))
    resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert resp.json() == {"error": "AI_ERROR", "code": "UNAVAILABLE", "message": "boom"}

    client = make_client(settings, gemini=make_gemini(error=ProviderError("network down")))
    resp = client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert resp.json() == {"error": "AI_ERROR", "message": "network down"}


def test_provider_error_is_logged_server_side(settings, make_client, make_gemini, caplog):
    error = ProviderError("quota", code=429, status="RESOURCE_EXHAUSTED", name="ClientError")
    client = make_client(settings, gemini=make_gemini(error=error))
    with caplog.at_level("ERROR", logger="arkwork.core.chat_service"):
        client.post("/api/chat", json={"messages": [{"content": "hello"}]})
    assert "RESOURCE_EXHAUSTED" in caplog.text
    assert "ClientError" in caplog.text


def test_history_and_intent_reach_the_provider(client, fake_gemini):
    messages = [{"role": "assistant" if i % 2 else "user", "content": f"m{i}"} for i in range(9)]
    messages.append({"role": "user", "content": "cari kerja"})
    resp = client.post(
        "/api/chat",
        json={
            "messages": messages,
            "intent": "jobs",
            "profile": {"skills": "piping"},
            "maxOutputTokens": 256,
            "temperature": 0.5,
        },
    )
    assert resp.status_code == 200

    conv = fake_gemini.calls[0]
    assert [t.text for t in conv.history[2:]] == ["m3", "m4", "m5", "m6", "m7", "m8"]
    assert "Rekomendasi Kerja" in conv.system_instruction
    assert '"skills": "piping"' in conv.system_instruction
    assert conv.max_output_tokens == 256
    assert conv.temperature == 0.5


def test_health_reports_model_and_key_state(make_client):
    with_key = make_client(Settings(gemini_api_key="k", gemini_model="gemini-x"))
    assert with_key.get("/api/chat").json() == {"ok": True, "model": "gemini-x", "hasKey": True}

    without_key = make_client(Settings(gemini_api_key="", gemini_model="gemini-x"))
    assert without_key.get("/api/chat").json() == {"ok": True, "model": "gemini-x", "hasKey": False}


def test_oversized_body_is_rejected_before_validation(make_client, fake_gemini):
    client = make_client(Settings(gemini_api_key="k"), gemini=fake_gemini)
    filler = "x" * (3 * 1024 * 1024)
    resp = client.post("/api/chat", json={"messages": [{"content": filler}]})
    assert resp.status_code == 413
    assert resp.json() == {"error": "PAYLOAD_TOO_LARGE", "message": "Request body exceeds 2097152 bytes."}
    assert fake_gemini.calls == []


def test_chunked_body_over_limit_is_rejected(make_client, fake_gemini):
    client = make_client(Settings(gemini_api_key="k", max_body_bytes=100), gemini=fake_gemini)

    def chunks():
        yield b'{"messages": [{"content": "'
        for _ in range(10):
            yield b"y" * 20
        yield b'"}]}'

    resp = client.post("/api/chat", content=chunks(), headers={"Content-Type": "application/json"})
    assert resp.status_code == 413
    assert resp.json()["error"] == "PAYLOAD_TOO_LARGE"
    assert fake_gemini.calls == []


def test_body_within_configured_limit_is_served(make_client, fake_gemini):
    client = make_client(Settings(gemini_api_key="k", max_body_bytes=100), gemini=fake_gemini)
    resp = client.post("/api/chat", json={"messages": [{"content": "hi"}]})
    assert resp.status_code == 200
    assert len(fake_gemini.calls) == 1


def test_missing_key_wins_over_malformed_body(make_client, fake_gemini):
    client = make_client(Settings(gemini_api_key=""), gemini=fake_gemini)
    for body in ({"messages": [], "intent": "x"}, {"maxOutputTokens": "lots"}):
        resp = client.post("/api/chat", json=body)
        assert resp.status_code == 503
        assert resp.json()["error"] == "GEMINI_API_KEY_MISSING"

    resp = client.post("/api/chat", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 503
    assert resp.json()["error"] == "GEMINI_API_KEY_MISSING"
    assert fake_gemini.calls == []


def test_service_answer_returns_plain_text(settings, make_gemini):
    service = ChatService(settings, client=make_gemini(reply="  halo  "))
    request = ChatRequest.model_validate({"messages": [{"content": "hi"}]})
    assert service.answer(request) == "halo"
