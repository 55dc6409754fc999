"""Configuration handling for the filtex CLI."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import typer

from filtex.expression.errors import UnsupportedFamilyError
from filtex.expression.families import coerce_family
from filtex.output_format import OutputFormat


DEFAULT_CONFIG_NAME = ".filtex.json"

COMMAND_OPTION_NAMES = {
    "color_flag",
    "config",
    "family",
    "field",
    "include_field",
    "locale",
    "out",
    "out_theme",
    "quote_advanced",
    "verbose",
}

CONFIG_DEFAULTS: dict[str, object] = {}


DEST_TO_OPTION_NAME: dict[str, str] = {
    "color_flag": "--color/--no-color",
    "config": "--config",
    "family": "--family",
    "field": "--field",
    "include_field": "--field-label/--no-field-label",
    "locale": "--locale",
    "out": "--out",
    "out_theme": "--out-theme",
    "quote_advanced": "--quote-advanced",
    "verbose": "--verbose",
}

BOOL_OPTIONS: dict[str, str] = {
    "--quote-advanced": "quote_advanced",
    "--verbose": "verbose",
}

STR_OPTIONS: dict[str, str] = {
    "--config": "config",
    "--family": "family",
    "--field": "field",
    "--locale": "locale",
    "--out": "out",
    "--out-theme": "out_theme",
}

PARSE_COMMAND_OPTIONS = {"color_flag", "family", "out", "out_theme"}
SUMMARY_COMMAND_OPTIONS = {"family", "field", "include_field", "locale", "quote_advanced"}


logger = logging.getLogger("filtex")


@dataclass
class LoadedCliConfig:
    """Fully parsed CLI config payload."""

    defaults: dict[str, object]


def load_config(filepath: str) -> tuple[dict[str, object], bool]:
    """Load config from JSON file.

    Args:
        filepath: Path to config file

    Returns:
        Tuple of (config dict, malformed flag)
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return ({}, False)
    except OSError:
        return ({}, True)
    except json.JSONDecodeError:
        return ({}, True)

    if not isinstance(config, dict):
        return ({}, True)

    return (config, False)


def parse_flag_pair_defaults(
    config: dict[str, object], enable_key: str, disable_key: str, dest: str
) -> tuple[dict[str, object], bool]:
    """Parse an on/off option pair such as --color and --no-color."""
    defaults: dict[str, object] = {}
    enable_value = config.get(enable_key)
    disable_value = config.get(disable_key)

    if enable_key in config and not isinstance(enable_value, bool):
        return ({}, False)
    if disable_key in config and not isinstance(disable_value, bool):
        return ({}, False)
    if enable_value is True and disable_value is True:
        return ({}, False)

    if enable_value is True:
        defaults[dest] = True
    if disable_value is True:
        defaults[dest] = False

    return (defaults, True)


def is_valid_family(value: str) -> bool:
    """Check if value names a known expression family."""
    try:
        coerce_family(value)
    except UnsupportedFamilyError:
        return False
    return True


def validate_str_option(key: str, value: object) -> str | None:
    """Validate string option value."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if key in ("--config", "--out", "--out-theme", "--locale", "--family") and not stripped:
        return None

    invalid_family = key == "--family" and not is_valid_family(value)
    invalid_out = key == "--out" and stripped.lower() not in {item.value for item in OutputFormat}
    if invalid_family or invalid_out:
        return None
    return value


def apply_config_entry(key: str, value: object, defaults: dict[str, object]) -> bool:
    """Apply a config entry to defaults if valid."""
    if key in BOOL_OPTIONS:
        if not isinstance(value, bool):
            return False
        defaults[BOOL_OPTIONS[key]] = value
        return True
    if key in STR_OPTIONS:
        str_value = validate_str_option(key, value)
        if str_value is None:
            return False
        defaults[STR_OPTIONS[key]] = str_value
        return True
    return False


def parse_config_sections(raw_config: dict[str, object]) -> dict[str, object] | None:
    """Parse top-level config sections.

    Accepted shape:
      {
        "defaults": { ... }
      }
    """
    if any(key != "defaults" for key in raw_config):
        return None

    defaults_section = raw_config.get("defaults", {})
    if not isinstance(defaults_section, dict):
        return None

    return cast(dict[str, object], defaults_section)


def build_config_defaults(config: dict[str, object]) -> dict[str, object] | None:
    """Validate config values and build defaults.

    Args:
        config: Raw "defaults" section

    Returns:
        Defaults keyed by option destination, or None if malformed
    """
    defaults: dict[str, object] = {}
    pairs = (
        ("--color", "--no-color", "color_flag"),
        ("--field-label", "--no-field-label", "include_field"),
    )
    pair_keys: set[str] = set()
    for enable_key, disable_key, dest in pairs:
        pair_defaults, pair_valid = parse_flag_pair_defaults(config, enable_key, disable_key, dest)
        if not pair_valid:
            return None
        defaults.update(pair_defaults)
        pair_keys.update((enable_key, disable_key))

    for key, value in config.items():
        if key in pair_keys:
            continue
        if not apply_config_entry(key, value, defaults):
            return None

    return defaults


def parse_config_argument(argv: list[str]) -> str:
    """Parse only the --config argument from argv."""
    default = DEFAULT_CONFIG_NAME
    for idx, arg in enumerate(argv[1:], start=1):
        if arg == "--config" and idx + 1 < len(argv):
            return argv[idx + 1]
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
    return default


def load_cli_config(argv: list[str]) -> LoadedCliConfig:
    """Load config defaults from the configured file path."""
    config_name = parse_config_argument(argv)
    config_path = Path(config_name)
    if not config_path.is_absolute():
        config_path = Path.cwd() / config_name
    config, load_error = load_config(str(config_path))

    if load_error:
        raise typer.BadParameter("Malformed config")

    defaults_config = parse_config_sections(config)
    if defaults_config is None:
        raise typer.BadParameter("Malformed config")

    defaults = build_config_defaults(defaults_config)
    if defaults is None:
        raise typer.BadParameter("Malformed config")

    filtered_defaults = {
        key: value for key, value in defaults.items() if key in COMMAND_OPTION_NAMES
    }
    return LoadedCliConfig(defaults=filtered_defaults)


def build_default_map(defaults: dict[str, object]) -> dict[str, dict[str, object]]:
    """Build Click default_map for Typer commands."""
    return {
        "parse": {key: value for key, value in defaults.items() if key in PARSE_COMMAND_OPTIONS},
        "summary": {
            key: value for key, value in defaults.items() if key in SUMMARY_COMMAND_OPTIONS
        },
    }


def _format_log_entry(name: str, value: object) -> str:
    """Format one name/value pair for logging."""
    return f"{name}={value!r}"


def log_applied_config_defaults(command_name: str) -> None:
    """Log config defaults loaded from config file."""
    if not logger.isEnabledFor(logging.INFO):
        return

    entries = [
        _format_log_entry(DEST_TO_OPTION_NAME[dest], value)
        for dest, value in sorted(CONFIG_DEFAULTS.items(), key=lambda item: item[0])
        if dest in DEST_TO_OPTION_NAME
    ]
    if entries:
        logger.info("Config defaults applied (%s): %s", command_name, ", ".join(entries))


def log_command_arguments(args: object, command_name: str) -> None:
    """Log all final argument values used to run a command."""
    if not logger.isEnabledFor(logging.INFO):
        return

    try:
        arg_items = vars(args).items()
    except TypeError:
        return

    entries = [
        _format_log_entry(arg_name, arg_value)
        for arg_name, arg_value in sorted(arg_items, key=lambda item: item[0])
    ]
    logger.info("Command arguments (%s): %s", command_name, ", ".join(entries))
