"""Business profile loading with ${ENV_VAR} substitution."""

import json
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ...domain.errors import ProfileLoadError

logger = logging.getLogger(__name__)

ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")
YAML_SUFFIXES = {".yaml", ".yml"}


def apply_env(value: str, env: Mapping[str, str] | None = None) -> str:
    """Replace ${NAME} with the environment value, or "" when unset."""
    source = os.environ if env is None else env
    return ENV_PATTERN.sub(lambda m: source.get(m.group(1), ""), value)


def expand_env(value: Any, env: Mapping[str, str] | None = None) -> Any:
    """Apply env substitution to every string inside a JSON-like structure."""
    if isinstance(value, str):
        return apply_env(value, env)
    if isinstance(value, list):
        return [expand_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: expand_env(v, env) for k, v in value.items()}
    return value


def load_profile(path: Path, env: Mapping[str, str] | None = None) -> Any:
    """Read a profile file (JSON, or YAML by suffix) without validating it."""
    path = Path(path).expanduser()
    text = path.read_text(encoding="utf-8")

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ProfileLoadError(f"Could not parse profile {path}: {e}") from e

    logger.debug(f"Loaded profile: {path}")
    return expand_env(data, env)
