from bard.api.config.loader import (
    find_config_file,
    generate_default_config,
    load_config_from_env,
    load_yaml_config,
)
from bard.api.config.models import (
    AppConfig,
    ContentConfig,
    EmailConfig,
    StorageConfig,
)

__all__ = [
    "Config",
    "AppConfig",
    "StorageConfig",
    "ContentConfig",
    "EmailConfig",
    "find_config_file",
    "load_yaml_config",
    "generate_default_config",
    "load_config_from_env",
    "set_config",
]


class ConfigProxy:
    """Process-wide settings, read once from the first config file found."""

    def __init__(self):
        path = find_config_file()
        data = load_yaml_config(path) if path else {}
        self._config = AppConfig.model_validate(data)

    def __getattr__(self, name):
        return getattr(self._config, name)

    def set(self, config: AppConfig) -> None:
        """Replace the current configuration."""
        self._config = config


Config = ConfigProxy()


def set_config(config: AppConfig) -> None:
    """Set the global configuration programmatically.

    Used by embedding applications and tests that build an AppConfig in
    code rather than shipping a bard.yaml.

    Args:
        config: The AppConfig instance to use globally.

    Example:
        >>> from bard.api.config import set_config, AppConfig
        >>> set_config(AppConfig(content={"normalize_on_save": False}))
    """
    Config.set(config)
