from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .enums import OverflowPolicy
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_COLOR = "Coral"
BACKGROUND_COLOR = "LightBlue"


@dataclass
class Settings:
    default_color: str = DEFAULT_COLOR
    background_color: str = BACKGROUND_COLOR
    overflow_policy: OverflowPolicy = OverflowPolicy.PRESERVE
    log_level: str = "INFO"
    json_logs: bool = False


def _read_env_file(env_path: Path | None = None) -> dict[str, str]:
    """Load a minimal .env so WAFFLE_* keys work without exporting them.

    Existing os.environ values always take precedence.
    """
    env_path = env_path or Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        text = env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable .env file", extra={"path": str(env_path), "error": str(e)})
        return {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        k, v = line.split("=", 1)
        env[k.strip()] = v.strip().strip('"').strip("'")
    return env


def _get_env(name: str, env_file: dict[str, str] | None = None) -> str | None:
    # Priority: process env -> .env
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    return None


def _parse_overflow(raw: str | None) -> OverflowPolicy:
    if not raw:
        return OverflowPolicy.PRESERVE
    try:
        return OverflowPolicy(raw.strip().lower())
    except ValueError:
        logger.warning(
            "Unknown overflow policy, using 'preserve'", extra={"overflow_policy": raw}
        )
        return OverflowPolicy.PRESERVE


def _parse_bool(raw: str | None) -> bool:
    return bool(raw) and raw.strip().lower() in {"1", "true", "yes", "on"}


def get_settings(env_path: Path | None = None) -> Settings:
    env_file = _read_env_file(env_path)
    return Settings(
        default_color=_get_env("WAFFLE_DEFAULT_COLOR", env_file) or DEFAULT_COLOR,
        background_color=_get_env("WAFFLE_BACKGROUND_COLOR", env_file) or BACKGROUND_COLOR,
        overflow_policy=_parse_overflow(_get_env("WAFFLE_OVERFLOW_POLICY", env_file)),
        log_level=(_get_env("WAFFLE_LOG_LEVEL", env_file) or "INFO").upper(),
        json_logs=_parse_bool(_get_env("WAFFLE_JSON_LOGS", env_file)),
    )
