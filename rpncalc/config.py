"""Runtime settings for rpncalc.

Settings come from three layers, later ones winning:
    1. Built-in defaults
    2. RPNCALC_* environment variables
    3. Explicit overrides (CLI options)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from rpncalc.backends import BackendName
from rpncalc.engine import DEFAULT_PRECISION, OPERATORS

ENV_PREFIX = "RPNCALC_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """A setting has a value rpncalc cannot use."""


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one calculator process."""

    precision: int = DEFAULT_PRECISION
    backend: BackendName = BackendName.AUTO
    operators: tuple[str, ...] = OPERATORS
    prompt: str = "> "
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def _parse_precision(raw: str | int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"precision must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"precision must be >= 0, got {value}")
    return value


def _parse_backend(raw: str | BackendName) -> BackendName:
    try:
        return BackendName(str(getattr(raw, "value", raw)).lower())
    except ValueError:
        choices = ", ".join(b.value for b in BackendName)
        raise ConfigError(f"unknown backend {raw!r} (choose: {choices})") from None


def _parse_log_level(raw: str) -> str:
    level = raw.upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"unknown log level {raw!r} (choose: {', '.join(_LOG_LEVELS)})")
    return level


def load_settings(
    precision: Optional[int] = None,
    backend: Optional[str] = None,
    prompt: Optional[str] = None,
    log_level: Optional[str] = None,
    environ: Optional[dict[str, str]] = None,
) -> Settings:
    """Resolve settings from defaults, the environment and overrides.

    Args:
        precision: Override for RPNCALC_PRECISION.
        backend: Override for RPNCALC_BACKEND (auto, decimal, float).
        prompt: Override for RPNCALC_PROMPT.
        log_level: Override for RPNCALC_LOG_LEVEL.
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        Frozen Settings.

    Raises:
        ConfigError: If any value is out of range or unknown.
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    raw_precision = precision if precision is not None else env.get(f"{ENV_PREFIX}PRECISION")
    if raw_precision is not None and raw_precision != "":
        settings = replace(settings, precision=_parse_precision(raw_precision))

    raw_backend = backend or env.get(f"{ENV_PREFIX}BACKEND")
    if raw_backend:
        settings = replace(settings, backend=_parse_backend(raw_backend))

    raw_prompt = prompt if prompt is not None else env.get(f"{ENV_PREFIX}PROMPT")
    if raw_prompt is not None:
        settings = replace(settings, prompt=raw_prompt)

    raw_level = log_level or env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if raw_level:
        settings = replace(settings, log_level=_parse_log_level(raw_level))

    return settings
