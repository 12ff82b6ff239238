"""Bind registry keys to gateway-backed callables from ``app_config.json``."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from agents.types import AssessmentPayload, ExtractionPayload, HintPayload, PolishPayload
from config.llm import AppConfig, LlmRoute, resolve_registry
from config.registry import ASSESS_KEY, EXTRACT_KEY, HINT_KEY, POLISH_KEY, bind_model
from llm_gateway import HttpClient, runnable

PROJECT_ROOT = Path(__file__).resolve().parent.parent

SCHEMAS: Dict[str, Type[BaseModel]] = {
    EXTRACT_KEY: ExtractionPayload,
    ASSESS_KEY: AssessmentPayload,
    HINT_KEY: HintPayload,
    POLISH_KEY: PolishPayload,
}


def read_prompt(path: str) -> str:
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = PROJECT_ROOT / candidate
    return candidate.read_text(encoding="utf-8")


def make_callable(
    route: LlmRoute, schema: Type[BaseModel], *, client: Optional[HttpClient] = None
) -> Callable[..., Dict[str, Any]]:
    """Adapt a gateway runnable to the registry calling convention."""

    chain = runnable(route, schema, client=client)

    def _call(
        *,
        system_prompt_path: str,
        inputs: Dict[str, Any],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens is not None:
            options["max_tokens"] = max_tokens
        messages = [
            {"role": "system", "content": read_prompt(system_prompt_path)},
            {"role": "user", "content": json.dumps(inputs, ensure_ascii=False, default=str)},
        ]
        result = chain.invoke({"messages": messages, "options": options})
        return result.model_dump()

    return _call


def bind_routes(cfg: AppConfig, *, client: Optional[HttpClient] = None) -> List[str]:
    """Bind every configured registry key and return the keys bound."""

    bound: List[str] = []
    for key, (route, schema) in resolve_registry(cfg, SCHEMAS).items():
        bind_model(key, make_callable(route, schema, client=client))
        bound.append(key)
    return bound


__all__ = ["SCHEMAS", "bind_routes", "make_callable", "read_prompt"]
