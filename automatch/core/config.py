"""
Matching configuration from the environment.

Every ``MatchingConfig`` field can be overridden with an ``AUTOMATCH_``
prefixed variable, e.g. ``AUTOMATCH_DATE_TOLERANCE_DAYS=5`` or
``AUTOMATCH_ENABLE_FUZZY_MATCHING=false``. Unset variables keep the
defaults.
"""
import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from automatch.models.matching import MatchingConfig
from automatch.services.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "AUTOMATCH_"

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(name, f"expected a boolean, got '{raw}'")


def _env_float(name: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ConfigError(name, f"expected a number, got '{raw}'") from exc


def load_matching_config(environ: Optional[Mapping[str, str]] = None) -> MatchingConfig:
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    for field_name, field_info in MatchingConfig.model_fields.items():
        env_name = f"{ENV_PREFIX}{field_name.upper()}"
        raw = environ.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        if field_info.annotation is bool:
            overrides[field_name] = _env_bool(env_name, raw)
        else:
            overrides[field_name] = _env_float(env_name, raw)

    try:
        config = MatchingConfig(**overrides)
    except ValidationError as exc:
        raise ConfigError(", ".join(sorted(overrides)) or "config", str(exc)) from exc

    if overrides:
        logger.info(f"Matching config overrides from environment: {sorted(overrides)}")
    return config
