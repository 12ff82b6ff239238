"""Configuration package for the interview orchestration service."""
from .errors import ConfigurationError, UnknownQuestionType
from .llm import AppConfig, LlmRoute, load_config, resolve_registry
from .registry import (
    ASSESS_KEY,
    EXTRACT_KEY,
    HINT_KEY,
    POLISH_KEY,
    bind_model,
    get_model,
    is_bound,
    unbind_model,
)
from .settings import (
    MAX_SESSION_SECONDS,
    QUIET_WINDOW_SECONDS,
    STALL_THRESHOLD_SECONDS,
    Settings,
    settings,
)

__all__ = [
    "ConfigurationError",
    "UnknownQuestionType",
    "AppConfig",
    "LlmRoute",
    "load_config",
    "resolve_registry",
    "ASSESS_KEY",
    "EXTRACT_KEY",
    "HINT_KEY",
    "POLISH_KEY",
    "bind_model",
    "get_model",
    "is_bound",
    "unbind_model",
    "MAX_SESSION_SECONDS",
    "QUIET_WINDOW_SECONDS",
    "STALL_THRESHOLD_SECONDS",
    "Settings",
    "settings",
]
