"""Configuration for fzy-tmux."""

import logging
import os
from collections.abc import Mapping

from pydantic import ValidationError

from fzy_tmux.errors import ConfigError
from fzy_tmux.models import PickerConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "FZY_TMUX_"
TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in TRUTHY


def load_config(environ: Mapping[str, str] | None = None) -> PickerConfig:
    """Build a PickerConfig from FZY_TMUX_* environment variables."""
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}
    for field in ("picker", "lines", "multiplexer"):
        raw = env.get(f"{ENV_PREFIX}{field.upper()}", "").strip()
        if raw:
            values[field] = raw
    values["debug"] = _env_flag(env.get(f"{ENV_PREFIX}DEBUG"))

    try:
        config = PickerConfig(**values)
    except ValidationError as e:
        errors = "; ".join(
            f"{ENV_PREFIX}{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"invalid configuration: {errors}") from e
    log.debug("config=%s", config.model_dump())
    return config
