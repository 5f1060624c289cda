"""
Configuration for the climbcalc command line.

Settings are resolved in this order, later sources winning:
    1. Defaults on CalcSettings
    2. The [calc] table of climbcalc.toml
    3. CLIMBCALC_* environment variables
    4. Explicit command line flags (applied by the CLI)

Example climbcalc.toml:

    [calc]
    prompt = "expr> "
    show_tree = false
    tree_indent = 2
    log_level = "DEBUG"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from climbcalc.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "climbcalc.toml"
DEFAULT_PROMPT = "Enter a valid maths expression? "

SHOW_TREE_ENV_VAR = "CLIMBCALC_SHOW_TREE"
TREE_INDENT_ENV_VAR = "CLIMBCALC_TREE_INDENT"
LOG_LEVEL_ENV_VAR = "CLIMBCALC_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class CalcSettings:
    """Display and logging options for the CLI."""

    prompt: str = DEFAULT_PROMPT
    show_tree: bool = True
    tree_indent: int = 4
    log_level: str = "WARNING"


def load_settings(path: Path | None = None) -> CalcSettings:
    """Load settings from a TOML file and the environment.

    Args:
        path: Explicit config file. When None, ./climbcalc.toml is used if it
            exists; otherwise only defaults and environment apply.

    Returns:
        Resolved CalcSettings.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    settings = CalcSettings()

    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILE
        if candidate.exists():
            settings = _apply_file(settings, candidate)
    else:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        settings = _apply_file(settings, path)

    return _apply_env(settings)


def _apply_file(settings: CalcSettings, path: Path) -> CalcSettings:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    calc = data.get("calc", {})
    if not isinstance(calc, dict):
        raise ConfigError(f"{path}: [calc] must be a table")

    prompt = calc.get("prompt", settings.prompt)
    show_tree = calc.get("show_tree", settings.show_tree)
    tree_indent = calc.get("tree_indent", settings.tree_indent)
    log_level = calc.get("log_level", settings.log_level)

    if not isinstance(prompt, str):
        raise ConfigError(f"{path}: calc.prompt must be a string")
    if not isinstance(show_tree, bool):
        raise ConfigError(f"{path}: calc.show_tree must be a boolean")
    if isinstance(tree_indent, bool) or not isinstance(tree_indent, int) or tree_indent < 0:
        raise ConfigError(f"{path}: calc.tree_indent must be a non-negative integer")
    if not isinstance(log_level, str) or log_level.upper() not in _LOG_LEVELS:
        raise ConfigError(f"{path}: calc.log_level must be one of {', '.join(_LOG_LEVELS)}")

    logger.debug("Loaded settings from %s", path)
    return replace(
        settings,
        prompt=prompt,
        show_tree=show_tree,
        tree_indent=tree_indent,
        log_level=log_level.upper(),
    )


def _apply_env(settings: CalcSettings) -> CalcSettings:
    show_tree_value = os.environ.get(SHOW_TREE_ENV_VAR, "").lower().strip()
    if show_tree_value in _TRUE_VALUES:
        settings = replace(settings, show_tree=True)
    elif show_tree_value in _FALSE_VALUES:
        settings = replace(settings, show_tree=False)
    elif show_tree_value:
        logger.warning(
            "Unknown %s value '%s'. Expected true or false; keeping %s.",
            SHOW_TREE_ENV_VAR,
            show_tree_value,
            settings.show_tree,
        )

    indent_value = os.environ.get(TREE_INDENT_ENV_VAR, "").strip()
    if indent_value:
        if indent_value.isdigit():
            settings = replace(settings, tree_indent=int(indent_value))
        else:
            logger.warning(
                "Unknown %s value '%s'. Expected a non-negative integer; keeping %d.",
                TREE_INDENT_ENV_VAR,
                indent_value,
                settings.tree_indent,
            )

    level_value = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper().strip()
    if level_value in _LOG_LEVELS:
        settings = replace(settings, log_level=level_value)
    elif level_value:
        logger.warning(
            "Unknown %s value '%s'. Valid values: %s. Keeping %s.",
            LOG_LEVEL_ENV_VAR,
            level_value,
            ", ".join(_LOG_LEVELS),
            settings.log_level,
        )

    return settings
