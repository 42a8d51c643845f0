"""
Provider and GitHub settings loading.

Loads settings from YAML with environment variable expansion.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_ENV = "PRLINK_CONFIG"

DEFAULT_ASANA_URL = "https://app.asana.com/api/1.0"
DEFAULT_COMMENT_PAGE_SIZE = 200
DEFAULT_STATUS_CONTEXT = "asana-link-presence"


def expand_env_vars(value: Any) -> Any:
    """
    Recursively expand ${VAR} environment variables in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with env vars expanded
    """
    if isinstance(value, str):
        # Match ${VAR} or $VAR patterns
        pattern = r'\$\{([^}]+)\}|\$([A-Z_][A-Z0-9_]*)'

        def replace(match):
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, "")

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]

    return value


def default_settings() -> dict:
    """Settings derived from the environment alone."""
    return {
        "default_provider": "asana",
        "providers": {
            "asana": {
                "base_url": os.environ.get("ASANA_API_URL", DEFAULT_ASANA_URL),
                "token": os.environ.get("ASANA_TOKEN", ""),
                "link_host": "app.asana.com",
                "comment_page_size": DEFAULT_COMMENT_PAGE_SIZE,
                "timeout_s": 30,
                "default_headers": {},
            }
        },
        "github": {
            "api_url": os.environ.get("GITHUB_API_URL", "https://api.github.com"),
            "token": os.environ.get("GITHUB_TOKEN", ""),
            "status_context": DEFAULT_STATUS_CONTEXT,
        },
    }


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: str | Path | None = None) -> dict:
    """
    Load settings from a YAML file.

    Looks for config in this order:
    1. Explicitly provided path
    2. $PRLINK_CONFIG
    3. config/prlink.yaml relative to the working directory

    Values missing from the file fall back to environment-derived defaults.
    Environment variables in the format ${VAR} are expanded.

    Args:
        config_path: Optional path to config file

    Returns:
        Dict with provider and github settings

    Raises:
        ValueError: If the file does not contain a mapping
        yaml.YAMLError: If YAML is malformed
    """
    if config_path is None:
        config_path = os.environ.get(DEFAULT_CONFIG_ENV) or Path("config") / "prlink.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return default_settings()

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Settings file {config_path} must contain a mapping")

    return _merge(default_settings(), expand_env_vars(config))


def get_provider_config(provider_name: str, config: dict | None = None) -> dict:
    """
    Get configuration for a specific provider.

    Args:
        provider_name: Name of the provider (e.g., "asana")
        config: Optional pre-loaded config dict

    Returns:
        Provider-specific configuration dict

    Raises:
        ValueError: If provider not found in config
    """
    if config is None:
        config = load_settings()

    providers = config.get("providers", {})

    if provider_name not in providers:
        raise ValueError(f"Provider '{provider_name}' not found in config")

    return providers[provider_name]
