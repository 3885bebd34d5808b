"""Configuration loading and parsing."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union

DEFAULT_CONFIG_FILENAME = "lazyencrypt.yaml"


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.
    
    Args:
        config_path: Path to lazyencrypt.yaml. If None, searches current directory.
        
    Returns:
        Parsed configuration dictionary
        
    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        config_path = Path(config_path)
    
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")
    
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")
    
    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")
    
    # Sections the rest of the tool expects to exist
    for section in ('paths', 'source', 'files', 'storage', 'logging'):
        if config.get(section) is None:
            config[section] = {}
    
    return config


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.
    
    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'source.timeout')
        default: Default value if path not found
        
    Returns:
        Configuration value or default
        
    Example:
        >>> get_config_value(config, 'source.mode')
        'local'
    """
    keys = path.split('.')
    value = config
    
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    
    return value
