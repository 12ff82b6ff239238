import json

import httpx
import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from agents.types import HintPayload
from config.llm import AppConfig, LlmRoute
from config.registry import HINT_KEY, get_model, is_bound
from llm_gateway import LlmGatewayError, chat, runnable
from services.model_bindings import bind_routes, read_prompt

ROUTE = LlmRoute(name="test", base_url="http://llm.local", model="tiny", max_retries=1)


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.status_code = status_code
        self._content = content

    def json(self):
        return {"choices": [{"message": {"content": self._content}}]}


class FakeClient:
    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    def post(self, url, *, json, headers, timeout):
        self.requests.append({"url": url, "json": json, "headers": headers})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def test_chat_strips_code_fences():
    client = FakeClient(FakeResponse('```json\n{"hint": "Think about reach."}\n```'))
    result = chat([{"role": "user", "content": "hint?"}], HintPayload, cfg=ROUTE, client=client)
    assert result.hint == "Think about reach."
    request = client.requests[0]
    assert request["url"] == "http://llm.local/v1/chat/completions"
    assert request["json"]["messages"][0]["role"] == "system"
    assert "JSON object" in request["json"]["messages"][0]["content"]


def test_chat_retries_invalid_output_with_hint():
    client = FakeClient(FakeResponse('{"nope": 1}'), FakeResponse('{"hint": "ok"}'))
    result = chat([{"role": "user", "content": "hint?"}], HintPayload, cfg=ROUTE, client=client)
    assert result.hint == "ok"
    retry_messages = client.requests[1]["json"]["messages"]
    assert retry_messages[-1]["content"].startswith("The previous reply failed validation.")


def test_chat_gives_up_after_retries():
    client = FakeClient(FakeResponse("not json"), FakeResponse("still not json"))
    with pytest.raises(LlmGatewayError):
        chat([{"role": "user", "content": "hint?"}], HintPayload, cfg=ROUTE, client=client)


def test_error_status_raises_without_retry():
    client = FakeClient(FakeResponse("", status_code=500))
    with pytest.raises(LlmGatewayError):
        chat([{"role": "user", "content": "hint?"}], HintPayload, cfg=ROUTE, client=client)
    assert len(client.requests) == 1


def test_transport_error_raises():
    client = FakeClient(httpx.ConnectError("refused"))
    with pytest.raises(LlmGatewayError):
        chat([{"role": "user", "content": "hint?"}], HintPayload, cfg=ROUTE, client=client)


def test_runnable_accepts_messages_and_options():
    client = FakeClient(FakeResponse('{"hint": "a"}'), FakeResponse('{"hint": "b"}'))
    chain = runnable(ROUTE, HintPayload, client=client)

    first = chain.invoke({"messages": [{"role": "user", "content": "hi"}], "options": {"max_tokens": 5}})
    second = chain.invoke([SystemMessage(content="be brief"), HumanMessage(content="hi")])

    assert (first.hint, second.hint) == ("a", "b")
    assert client.requests[0]["json"]["max_tokens"] == 5
    roles = [m["role"] for m in client.requests[1]["json"]["messages"]]
    assert roles == ["system", "system", "user"]


def test_bind_routes_registers_callables():
    client = FakeClient(FakeResponse('{"hint": "Consider reach."}'))
    cfg = AppConfig(llm_routes={"local": ROUTE}, registry={HINT_KEY: "local"})

    assert bind_routes(cfg, client=client) == [HINT_KEY]
    assert is_bound(HINT_KEY)

    out = get_model(HINT_KEY)(
        system_prompt_path="prompts/hint_agent.txt", inputs={"level": 1}, temperature=0.1, max_tokens=40
    )
    assert out == {"hint": "Consider reach."}
    sent = client.requests[0]["json"]
    assert sent["temperature"] == 0.1
    assert sent["messages"][1]["content"] == read_prompt("prompts/hint_agent.txt")
    assert json.loads(sent["messages"][2]["content"]) == {"level": 1}


def test_bind_routes_rejects_unknown_route():
    cfg = AppConfig(llm_routes={}, registry={HINT_KEY: "missing"})
    with pytest.raises(KeyError):
        bind_routes(cfg)
