import os
from dataclasses import dataclass

_DEFAULT_GIT_BINARY = "git"
_DEFAULT_GIT_TIMEOUT = 10.0
_DEFAULT_MAX_TREE_DEPTH = 64
_DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    git_binary: str = _DEFAULT_GIT_BINARY
    git_timeout: float = _DEFAULT_GIT_TIMEOUT
    max_tree_depth: int = _DEFAULT_MAX_TREE_DEPTH
    log_level: str = _DEFAULT_LOG_LEVEL


def _env_number(name: str, default: float, cast: type[int] | type[float]) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def get_settings() -> Settings:
    """Read settings from ``ATTENTION_EDITOR_*`` environment variables."""
    return Settings(
        git_binary=os.getenv("ATTENTION_EDITOR_GIT_BINARY", _DEFAULT_GIT_BINARY),
        git_timeout=float(_env_number("ATTENTION_EDITOR_GIT_TIMEOUT", _DEFAULT_GIT_TIMEOUT, float)),
        max_tree_depth=int(_env_number("ATTENTION_EDITOR_MAX_TREE_DEPTH", _DEFAULT_MAX_TREE_DEPTH, int)),
        log_level=os.getenv("ATTENTION_EDITOR_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper(),
    )
