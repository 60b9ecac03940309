# chargingcloud/api/core/loader.py
"""
YAML configuration loading with environment substitution.
"""
from __future__ import annotations

import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively replace ``${VAR}`` and ``${VAR:-default}`` in strings.

    Raises:
        ValueError: If ``VAR`` is unset and no default is given.
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_replace_env_var, value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def _replace_env_var(match: re.Match) -> str:
    name, default = match.group(1), match.group(2)
    env_value = os.environ.get(name)
    if env_value is not None:
        return env_value
    if default is not None:
        return default
    raise ValueError(f"Environment variable '{name}' is not set and no default provided")


def resolve_files(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns into a sorted, de-duplicated list of files."""
    files = {Path(m).resolve() for pattern in patterns for m in glob(pattern)}
    return sorted(f for f in files if f.is_file())


def load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    """
    Load every YAML document matching ``patterns``, env vars substituted.

    Files are read in sorted path order. No match is not an error: a
    warning is logged and an empty list returned.
    """
    patterns = list(patterns)
    files = resolve_files(patterns)
    if not files:
        logger.warning("No config files found matching patterns: %s", patterns)
        return []

    logger.info("Loading config files: %s", [str(f) for f in files])

    out: list[dict[str, Any]] = []
    for f in files:
        try:
            with f.open("r", encoding="utf-8") as fh:
                content = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Failed to load YAML file '%s': %s", f, exc)
            raise
        if not isinstance(content, dict):
            raise ValueError(f"Config file '{f}' must contain a mapping at top level")
        out.append(substitute_env_vars(content))
    return out
