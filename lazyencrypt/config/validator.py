"""Configuration validation."""

import codecs
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_SOURCE_MODES = ['local', 'bundled']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
VALID_STORAGE_ENCODINGS = [
    'utf-8', 'utf-16', 'utf-16-le', 'utf-16-be', 'utf-32', 'utf-32-le', 'utf-32-be',
]


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    errors.extend(_validate_paths(config.get('paths') or {}))
    errors.extend(_validate_source(config.get('source') or {}))
    errors.extend(_validate_files(config.get('files') or {}))
    errors.extend(_validate_storage(config.get('storage') or {}))
    errors.extend(_validate_logging(config.get('logging') or {}))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_paths(section: Dict[str, Any]) -> List[str]:
    """Validate paths section."""
    errors = []

    for path_key in ('assets', 'data'):
        value = section.get(path_key)
        if not value:
            errors.append(f"paths.{path_key} is required")
        elif not isinstance(value, str):
            errors.append(f"paths.{path_key} must be a string")

    return errors


def _validate_source(section: Dict[str, Any]) -> List[str]:
    """Validate source retrieval section."""
    errors = []

    mode = section.get('mode', 'local')
    if mode not in VALID_SOURCE_MODES:
        errors.append(
            f"source.mode must be one of: {', '.join(VALID_SOURCE_MODES)}"
        )
    elif mode == 'bundled':
        base_url = section.get('base_url')
        if not base_url or not isinstance(base_url, str):
            errors.append("source.base_url is required when source.mode is 'bundled'")
        elif not base_url.startswith(('http://', 'https://')):
            errors.append("source.base_url must be an http(s) URL")

    if 'timeout' in section:
        timeout = section['timeout']
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            errors.append("source.timeout must be a number")
        elif timeout <= 0:
            errors.append("source.timeout must be greater than 0")

    return errors


def _validate_files(section: Dict[str, Any]) -> List[str]:
    """Validate artifact file names."""
    errors = []

    for name_key in ('key', 'secret'):
        if name_key not in section:
            continue
        filename = section[name_key]
        if not isinstance(filename, str) or not filename.strip():
            errors.append(f"files.{name_key} must be a non-empty string")
        elif '/' in filename or '\\' in filename:
            errors.append(f"files.{name_key} must be a file name, not a path")

    if section.get('key') and section.get('key') == section.get('secret'):
        errors.append("files.key and files.secret must be different")

    return errors


def _validate_storage(section: Dict[str, Any]) -> List[str]:
    """Validate storage section."""
    errors = []

    if 'encoding' in section:
        encoding = section['encoding']
        try:
            codec = codecs.lookup(encoding)
        except (LookupError, TypeError):
            errors.append(f"storage.encoding is not a known encoding: {encoding}")
        else:
            if not codec._is_text_encoding:
                errors.append(f"storage.encoding is not a text encoding: {encoding}")
            elif codec.name not in VALID_STORAGE_ENCODINGS:
                # Obfuscated text can hold any code unit, lone surrogates included
                errors.append(
                    f"storage.encoding must be one of: {', '.join(VALID_STORAGE_ENCODINGS)}"
                )

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging section."""
    errors = []

    level = section.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if 'console' in section and not isinstance(section['console'], bool):
        errors.append("logging.console must be a boolean")

    log_file = section.get('file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append("logging.file must be a string path")

    return errors
