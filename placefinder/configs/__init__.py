import yaml
import os
import re
import logging
from pathlib import Path
from dotenv import dotenv_values
from typing import Union

logger = logging.getLogger(__name__)


def get_ancestor_dir(start_path: Union[str, Path], steps: int) -> Path:
    if not isinstance(steps, int) or steps < 0:
        raise ValueError("Steps must be a non-negative integer.")

    path = Path(start_path).resolve()
    if path.is_file():
        path = path.parent

    for _ in range(steps):
        original_path = path
        path = path.parent
        # Went past the filesystem root
        if path == original_path:
            raise ValueError(
                f"Cannot go up {steps} levels from '{start_path}'. "
                "Traversal went beyond the filesystem root."
            )

    return path


def _load_yaml_file(filepath: str) -> dict:
    """Loads a single YAML file."""
    if os.path.exists(filepath):
        try:
            with open(filepath, "r") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Error loading YAML file '{filepath}': {e}")
            return {}
    return {}


def _load_env(filepath: str) -> dict:
    """Loads environment variables from a .env file."""
    if os.path.exists(filepath):
        return dict(dotenv_values(filepath))
    logger.warning(f".env file not found at '{filepath}'")
    return {}


def _resolve_placeholders(data, original_data: dict):
    """
    Recursively replaces '${key}' placeholders in a dictionary or list using
    top-level values of original_data.
    """
    if isinstance(data, dict):
        return {k: _resolve_placeholders(v, original_data) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_placeholders(item, original_data) for item in data]
    elif isinstance(data, str):
        for match in re.findall(r"\$\{(\w+)\}", data):
            replacement_value = original_data.get(match)
            data = data.replace(f"${{{match}}}", f"{replacement_value}")
        return data
    else:
        return data


def recursive_replace(data, old_value, new_value):
    """
    Recursively replace string values in nested dictionaries/lists.
    """
    if isinstance(data, dict):
        return {
            key: recursive_replace(value, old_value, new_value)
            for key, value in data.items()
        }
    elif isinstance(data, list):
        return [recursive_replace(item, old_value, new_value) for item in data]
    elif isinstance(data, str):
        return data.replace(old_value, new_value)
    else:
        return data


def handle_env_path(filedir: Union[str, Path]) -> dict:
    """
    Resolves environment values: the repo-root .env first, then a .env in
    ENV_FILE_DIR, then plain process environment for ENV_KEYS.
    """
    filepath = os.path.join(filedir, ".env")
    if os.path.exists(filepath):
        return _load_env(filepath)
    if os.environ.get("ENV_FILE_DIR"):
        return _load_env(os.path.join(os.environ["ENV_FILE_DIR"], ".env"))
    return {key: os.environ.get(key) for key in ENV_KEYS if os.environ.get(key)}


def load_configs(filepath: str) -> dict:
    loaded_data = _load_yaml_file(filepath)
    for key, value in replacements.items():
        loaded_data = recursive_replace(loaded_data, old_value=key, new_value=value)
    return _resolve_placeholders(loaded_data, loaded_data)


ENV_KEYS = [
    "APP_NAME",
    "DEBUG",
    "LOG_LEVEL",
    "MONGO_URI",
    "MONGO_DB",
]

ENV_DEFAULTS = {
    "MONGO_URI": "mongodb://localhost:27017",
    "MONGO_DB": "placefinder",
    "LOG_LEVEL": "INFO",
}

REPO_ROOT = get_ancestor_dir(__file__, 2)
CONFIGS_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = Path(CONFIGS_DIR).parent.resolve()

replacements = {"<ROOT_PATH>": str(PROJECT_ROOT)}

env = {**ENV_DEFAULTS, **{k: v for k, v in handle_env_path(REPO_ROOT).items() if v}}
configs = load_configs(os.path.join(CONFIGS_DIR, "config.yaml"))
