"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from src.crud_demo.core.exceptions import ConfigurationError
from src.crud_demo.runtime.config.config_data import ConfigData


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    def replacer(match):
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ConfigurationError(
                    f"Required environment variable {var_name}: {error_msg}"
                )
            return value

        else:
            var_name = var_expr
            value = os.getenv(var_name)
            if value is None:
                raise ConfigurationError(
                    f"Required environment variable {var_name} not set"
                )
            return value

    pattern = r'\$\{([^}]+)\}'
    return re.sub(pattern, replacer, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment.

    With ``APP_ENVIRONMENT=test``, ``TEST_DB_NAME=scratch`` makes ``${DB_NAME}``
    resolve to ``scratch``.
    """
    prefix = f"{env_mode.upper()}_"
    env_variables = [
        (var, value) for var, value in os.environ.items() if var.startswith(prefix)
    ]
    logger.debug("Applying environment-specific overrides: {}", [v for v, _ in env_variables])

    for var_name, var_value in env_variables:
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        logger.debug(f"Set environment variable {new_var_name} from {var_name}")


def load_templated_yaml(file_path: Path, env_file: Path | None = Path(".env")) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Variables from ``env_file`` are loaded first; values already present in
    the process environment win.

    Args:
        file_path: Path to the YAML file
        env_file: Optional dotenv file to load before substitution

    Returns:
        Parsed configuration with environment variables substituted

    Raises:
        ConfigurationError: If required environment variables are missing or
            the file does not validate
        FileNotFoundError: If the YAML file doesn't exist
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file, override=False)

    with open(file_path) as f:
        content = f.read()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.debug(f"Loading configuration for environment: {env_mode}")
    apply_environment_overrides(env_mode)

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ConfigurationError(f"Configuration file {file_path} is empty")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML: {e}") from e

    try:
        config_data = loaded.get("config", {})
        return ConfigData(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(file_path: Path = Path("config.yaml")) -> ConfigData:
    """Load ``file_path`` if it exists, otherwise fall back to built-in defaults."""
    if not file_path.exists():
        logger.debug("No configuration file at {}; using defaults", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
