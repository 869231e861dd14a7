import os
from pathlib import Path

import yaml

from bard.api.utils import get_default_data_dir

CONFIG_PATH_ENV = "BARD_API_CONFIG_PATH"


def find_config_file(cli_path: Path | None = None) -> Path | None:
    """Find the YAML config file using the search path.

    Search order:
    1. CLI-provided path (if given)
    2. BARD_API_CONFIG_PATH environment variable
    3. ./bard.yaml (current directory)
    4. ~/.config/bard/config.yaml (user config)

    Returns None if no config file is found.
    """
    if cli_path:
        if cli_path.exists():
            return cli_path
        raise FileNotFoundError(f"Config file not found: {cli_path}")

    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {path}")

    cwd_config = Path.cwd() / "bard.yaml"
    if cwd_config.exists():
        return cwd_config

    user_config = Path.home() / ".config" / "bard" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def load_yaml_config(path: Path) -> dict:
    """Load and parse a YAML config file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return data or {}


def generate_default_config() -> dict:
    """Generate a default YAML config structure."""
    return {
        "environment": "production",
        "storage": {"data_dir": str(get_default_data_dir())},
        "content": {"normalize_on_save": True},
        "email": {
            "api_key": "",
            "base_url": "https://api.sendgrid.com",
            "from_name": "Bard",
            "from_email": "noreply@getbard.com",
            "unsubscribe_group_id": 16922,
            "timeout": 30,
        },
    }


def load_config_from_env() -> dict:
    """Load config values from environment variables.

    Used to seed a YAML config file from an existing environment-based
    deployment.
    """
    result: dict = {}

    env_mappings = {
        "ENV": "environment",
        "DATA_DIR": ("storage", "data_dir"),
        "NORMALIZE_ON_SAVE": ("content", "normalize_on_save"),
        "SENDGRID_API_KEY": ("email", "api_key"),
        "SENDGRID_BASE_URL": ("email", "base_url"),
        "EMAIL_FROM_NAME": ("email", "from_name"),
        "EMAIL_FROM_ADDRESS": ("email", "from_email"),
        "EMAIL_UNSUBSCRIBE_GROUP_ID": ("email", "unsubscribe_group_id"),
    }

    for env_var, path in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            if isinstance(path, tuple):
                current = result
                for key in path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]
                current[path[-1]] = value
            else:
                result[path] = value

    return result
