"""
Config Manager
==============

Reporter option files for the command line front end.
Provides strict schema validation, JSON/YAML loading and CLI argument merging.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml


__all__ = [
    'CONFIG_SCHEMA',
    'ConfigError',
    'validate_options',
    'load_config',
    'merge_cli_args',
    'decode_escapes',
]

CONFIG_SCHEMA = {
    'verbose': {'type': bool, 'example': False},
    'log': {'type': bool, 'example': False},
    'interval': {'type': int, 'example': 1000},
    'open': {'type': str, 'example': '\\033]0;'},
    'close': {'type': str, 'example': '\\007'},
}

_ESCAPES = {
    r'\033': '\x1b',
    r'\x1b': '\x1b',
    r'\e': '\x1b',
    r'\007': '\x07',
    r'\x07': '\x07',
    r'\a': '\x07',
    r'\\': '\\',
}
_ESCAPE_PATTERN = re.compile('|'.join(re.escape(k) for k in sorted(_ESCAPES, key=len, reverse=True)))


class ConfigError(Exception):
    """Raised when config validation fails."""
    pass


def _type_name(t: type) -> str:
    """Return human-readable type name."""
    type_names = {
        str: 'string',
        int: 'integer',
        bool: 'boolean',
    }
    return type_names.get(t, t.__name__)


def validate_options(options: dict) -> None:
    """
    Validate reporter options against the schema.

    All keys are optional, so a partial config is valid.

    Parameters
    ----------
    options : dict
        Options to validate.

    Raises
    ------
    ConfigError
        If validation fails, with detailed error message.
    """
    errors: dict = {}

    for key, value in options.items():
        if key not in CONFIG_SCHEMA:
            errors.setdefault('unknown', []).append(f"  '{key}'")
            continue

        schema = CONFIG_SCHEMA[key]
        expected_type = schema['type']
        # bool is a subclass of int, reject it for integer fields
        wrong = not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool))
        if wrong:
            actual = _type_name(type(value))
            expected = _type_name(expected_type)
            errors.setdefault('wrong_type', []).append(f"  '{key}' (expected: {expected}, got: {actual}, example: {schema['example']})")
        elif key == 'interval' and value < 0:
            errors.setdefault('out_of_range', []).append(f"  '{key}' (expected: >= 0, got: {value})")

    if errors:
        msg_parts = ['Configuration validation failed:']
        if 'wrong_type' in errors:
            msg_parts.append('Wrong type:')
            msg_parts.extend(errors['wrong_type'])
        if 'out_of_range' in errors:
            msg_parts.append('Out of range:')
            msg_parts.extend(errors['out_of_range'])
        if 'unknown' in errors:
            msg_parts.append('Unknown keys:')
            msg_parts.extend(errors['unknown'])

        raise ConfigError('\n'.join(msg_parts))


def decode_escapes(value: str) -> str:
    """
    Turn escape notations such as ``\\033`` or ``\\a`` into control characters.

    Parameters
    ----------
    value : str
        Text as written in a config file or on the command line.

    Returns
    -------
    str
        Text with control characters.
    """
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES[m.group(0)], value)


def load_config(config_path: Path) -> dict:
    """
    Load and validate reporter options from a JSON or YAML file.

    Parameters
    ----------
    config_path : Path
        Path to a ``.json``, ``.yaml`` or ``.yml`` file.

    Returns
    -------
    dict
        Validated options. Only keys present in the file are returned.

    Raises
    ------
    ConfigError
        If the file is missing, cannot be parsed, or fails validation.
    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix == '.json':
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in config file: {e}")
        elif suffix in ('.yaml', '.yml'):
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in config file: {e}")
        else:
            raise ConfigError(f"Unsupported config file type: {config_path.name} (use .json, .yaml or .yml)")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file must contain a mapping, got: {type(config).__name__}")

    validate_options(config)

    for key in ('open', 'close'):
        if key in config:
            config[key] = decode_escapes(config[key])

    return config


def merge_cli_args(config: dict, cli_args: dict) -> dict:
    """
    Merge CLI arguments into config, with CLI taking precedence.

    Parameters
    ----------
    config : dict
        Base options.
    cli_args : dict
        CLI values keyed by option name. None values are skipped.

    Returns
    -------
    dict
        Merged options.
    """
    result = dict(config)

    for key, value in cli_args.items():
        if value is None:
            continue
        if key in ('open', 'close'):
            value = decode_escapes(value)
        result[key] = value

    return result
