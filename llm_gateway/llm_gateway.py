from __future__ import annotations  # Schema-validated chat completions for the interview agents

import json
import logging
import os
import threading
from typing import Any, Dict, Optional, Protocol, Sequence, Type, TypeVar

import httpx
from langchain_core.messages import BaseMessage
from langchain_core.runnables import RunnableLambda
from pydantic import BaseModel, ValidationError

from config.llm import LlmRoute

logger = logging.getLogger(__name__)

_ROUTE_LOCKS: Dict[str, threading.Lock] = {}
_ROUTE_LOCKS_GUARD = threading.Lock()

T = TypeVar("T", bound=BaseModel)


class HttpClient(Protocol):  # Anything with an httpx-style post()
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> Any: ...


class LlmGatewayError(RuntimeError):
    pass


def _lock_for(route: LlmRoute) -> threading.Lock:
    key = route.name or f"{route.base_url}{route.endpoint}"
    with _ROUTE_LOCKS_GUARD:
        return _ROUTE_LOCKS.setdefault(key, threading.Lock())


def _headers(route: LlmRoute) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if route.api_key_env:
        api_key = os.getenv(route.api_key_env)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
    headers.update(route.extra_headers)
    return headers


def _schema_prompt(schema: Type[BaseModel]) -> Dict[str, str]:
    schema_json = json.dumps(schema.model_json_schema(), indent=2)
    return {"role": "system", "content": "Reply with a single JSON object matching this schema:\n" + schema_json}


def chat(
    messages: Sequence[Dict[str, str]],
    schema: Type[T],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> T:
    """Send ``messages`` to the route and validate the reply against ``schema``.

    Validation failures are retried up to ``cfg.max_retries`` times with a hint
    describing the last error. Transport and HTTP errors raise immediately.

    Raises:
        LlmGatewayError: on transport failure, error status or exhausted retries.
    """

    def _execute() -> T:
        base = ([_schema_prompt(schema)] if cfg.enforce_json else []) + _normalize_messages(messages)
        attempts = cfg.max_retries + 1
        last_error: Optional[Exception] = None
        owns_client = client is None
        http = client or httpx.Client(timeout=cfg.timeout_s)
        try:
            for attempt in range(attempts):
                attempt_messages = list(base)
                if last_error is not None:
                    attempt_messages.append({"role": "system", "content": _retry_hint(str(last_error), cfg.enforce_json)})
                payload: Dict[str, Any] = {"model": cfg.model, "messages": attempt_messages}
                if cfg.temperature is not None:
                    payload["temperature"] = cfg.temperature
                if options:
                    payload.update(options)
                if cfg.response_format:
                    payload["response_format"] = {"type": cfg.response_format}
                logger.info("LLM request route=%s model=%s attempt=%d/%d", cfg.name, cfg.model, attempt + 1, attempts)
                try:
                    response = http.post(
                        f"{cfg.base_url}{cfg.endpoint}", json=payload, headers=_headers(cfg), timeout=cfg.timeout_s
                    )
                except httpx.HTTPError as exc:
                    logger.error("LLM transport failure route=%s: %s", cfg.name, exc)
                    raise LlmGatewayError("LLM transport failed") from exc
                if response.status_code >= 400:
                    logger.error("LLM error status route=%s: %s", cfg.name, response.status_code)
                    raise LlmGatewayError(f"LLM returned status {response.status_code}")
                try:
                    data = response.json()
                except ValueError as exc:
                    raise LlmGatewayError("LLM payload was not JSON") from exc
                try:
                    return schema.model_validate_json(_strip_code_fences(_extract_content(data)))
                except ValidationError as exc:
                    logger.warning("LLM output failed validation route=%s: %s", cfg.name, exc)
                    last_error = exc
        finally:
            if owns_client:
                http.close()
        raise LlmGatewayError("LLM output validation failed") from last_error

    if cfg.sequential:
        with _lock_for(cfg):
            return _execute()
    return _execute()


def runnable(route: LlmRoute, schema: Type[T], *, client: Optional[HttpClient] = None) -> RunnableLambda:
    """Wrap ``chat`` for LangChain pipelines.

    The input is a message list, a LangChain prompt value, or a dict with
    ``messages`` and optional ``options``.
    """

    def _invoke(payload: Any) -> T:
        options = None
        if isinstance(payload, dict) and "messages" in payload:
            options = payload.get("options")
            payload = payload["messages"]
        return chat(_coerce_messages(payload), schema, cfg=route, client=client, options=options)

    return RunnableLambda(_invoke)


def _normalize_messages(messages: Sequence[Dict[str, str]]) -> list[Dict[str, str]]:
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": str(item.get("content", ""))})
    return normalized


def _extract_content(data: Any) -> str:  # OpenAI-style choices or a bare content field
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict) and isinstance(message.get("content"), str):
                return message["content"]
        if isinstance(data.get("content"), str):
            return data["content"]
    raise LlmGatewayError("LLM response missing content")


def _strip_code_fences(content: str) -> str:
    text = content.strip()
    if not text.startswith("```"):
        return text
    lines = text.splitlines()[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _retry_hint(error_text: Optional[str], enforce_json: bool) -> str:
    hint = "The previous reply failed validation."
    if error_text:
        first = error_text.splitlines()[0].strip()
        hint += f" Reason: {first[:197] + '...' if len(first) > 200 else first}."
    if enforce_json:
        return hint + " Return a single JSON object that matches the schema."
    return hint + " Follow the requested format precisely."


def _coerce_messages(payload: Any) -> list[Dict[str, str]]:
    if hasattr(payload, "to_messages"):
        payload = payload.to_messages()
    if isinstance(payload, BaseMessage):
        return [_message_dict(payload)]
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, (list, tuple)):
        return [_message_dict(item) if isinstance(item, BaseMessage) else item for item in payload]
    raise TypeError("Unsupported message payload for LLM runnable")


def _message_dict(message: BaseMessage) -> Dict[str, str]:
    role = {"human": "user", "ai": "assistant"}.get(message.type, message.type)
    content = message.content if isinstance(message.content, str) else json.dumps(message.content)
    return {"role": role, "content": content}
