"""Configuration loader module."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from jira_subtask_generator.config.settings import JIRA_ENV_VARS, Settings
from jira_subtask_generator.exceptions import ConfigurationError

ENV_PREFIX = "JIRA_SUBTASK_GENERATOR_"

DEFAULT_CONFIG_LOCATIONS = (
    Path("jira-subtask-generator.yaml"),
    Path("~/.jira_subtask_generator/config.yaml"),
)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return content


def _get_default_config() -> dict[str, Any]:
    """Get default configuration."""
    return Settings().model_dump()


def _convert_like(original: Any, value: str) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(original, float):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def _apply_env_overrides(
    config: dict[str, Any],
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    ``JIRA_URL``, ``JIRA_EMAIL`` and ``JIRA_TOKEN`` set the Jira
    credentials. Any other key can be overridden with the
    JIRA_SUBTASK_GENERATOR_ prefix, using double underscore (__) to
    separate nested keys.

    Example:
        JIRA_TOKEN=abcdef0123456789
        JIRA_SUBTASK_GENERATOR_LOGGING__LEVEL=DEBUG
        JIRA_SUBTASK_GENERATOR_BATCH__FAIL_FAST=false

    Args:
        config: Base configuration dictionary
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Configuration with environment overrides applied
    """
    environ = os.environ if environ is None else environ
    result = config.copy()
    result["jira"] = dict(result.get("jira") or {})

    for field_name, env_name in JIRA_ENV_VARS.items():
        value = environ.get(env_name)
        if value:
            result["jira"][field_name] = value

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        parts = key[len(ENV_PREFIX) :].lower().split("__")

        current = result
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            elif not isinstance(current[part], dict):
                break
            else:
                current[part] = dict(current[part])
            current = current[part]
        else:
            final_key = parts[-1]
            if final_key in current:
                current[final_key] = _convert_like(current[final_key], value)
            else:
                current[final_key] = value

    return result


def load_config(
    config_path: str | Path | None = None,
    environ: dict[str, str] | None = None,
    include_credentials: bool = True,
) -> Settings:
    """Load configuration from file with defaults and environment overrides.

    Loading order (later overrides earlier):
    1. Default configuration
    2. Configuration file (if provided)
    3. Environment variables

    Args:
        config_path: Optional path to configuration file
        environ: Environment mapping (defaults to os.environ)
        include_credentials: When False, Jira url, email and token are left
            unset and not validated (dry runs never contact Jira)

    Returns:
        Validated Settings object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = _get_default_config()

    if config_path:
        file_config = _load_yaml_file(Path(config_path))
        config = _deep_merge(config, file_config)

    config = _apply_env_overrides(config, environ)

    if not include_credentials and isinstance(config.get("jira"), dict):
        config["jira"] = {k: v for k, v in config["jira"].items() if k not in JIRA_ENV_VARS}

    try:
        return Settings.model_validate(config)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(loc) for loc in err["loc"])
            errors.append(f"{loc}: {err['msg']}")
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}") from None


def find_config_file(environ: dict[str, str] | None = None) -> Path | None:
    """Locate the config file used when none is given on the command line.

    JIRA_SUBTASK_GENERATOR_CONFIG wins; otherwise the first existing file of
    ./jira-subtask-generator.yaml and ~/.jira_subtask_generator/config.yaml.

    Raises:
        ConfigurationError: If JIRA_SUBTASK_GENERATOR_CONFIG names a missing file
    """
    environ = os.environ if environ is None else environ

    explicit = environ.get(f"{ENV_PREFIX}CONFIG")
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")
        return path

    for location in DEFAULT_CONFIG_LOCATIONS:
        path = location.expanduser()
        if path.is_file():
            return path
    return None
