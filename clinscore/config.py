"""Global configuration for clinscore.

Configuration lives in ``~/.config/clinscore/config.yaml`` (the directory can
be moved with ``CLINSCORE_HOME``). Environment variables take precedence
over the file.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

HOME_ENV = "CLINSCORE_HOME"
TEMPLATE_REGISTRY_ENV = "CLINSCORE_TEMPLATE_REGISTRY"
LOG_LEVEL_ENV = "CLINSCORE_LOG_LEVEL"

CONFIG_FILENAME = "config.yaml"
DEFAULT_LOG_LEVEL = "WARNING"

SCHEMA_DIR = Path(__file__).parent / "schemas"


class GlobalConfig(BaseModel):
    """Settings read from config.yaml."""

    default_template_registry_path: str | None = None
    log_level: str | None = None


def get_clinscore_home() -> Path:
    """Directory holding config.yaml and the synced registry."""
    env_home = os.environ.get(HOME_ENV)
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".config" / "clinscore"


def get_registry_root() -> Path:
    """Directory the registries are synced into by ``clinscore init``."""
    return get_clinscore_home() / "registry"


def get_config_path() -> Path:
    """Path of config.yaml."""
    return get_clinscore_home() / CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load config.yaml, or defaults when it does not exist."""
    config_path = get_config_path()
    if not config_path.exists():
        return GlobalConfig()
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    return GlobalConfig.model_validate(data)


def save_global_config(config: GlobalConfig) -> Path:
    """Write config.yaml and return its path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(exclude_none=True), f, sort_keys=False)
    return config_path


def get_template_registry_path() -> Path:
    """Resolve the template registry.

    Order: ``CLINSCORE_TEMPLATE_REGISTRY``, then config.yaml, then the
    registry synced under the clinscore home.
    """
    env_path = os.environ.get(TEMPLATE_REGISTRY_ENV)
    if env_path:
        return Path(env_path)

    config = load_global_config()
    if config.default_template_registry_path:
        return Path(config.default_template_registry_path)

    return get_registry_root() / "template-registry"


def get_template_schema_path() -> Path:
    """Path of the bundled assessment template JSON schema."""
    return SCHEMA_DIR / "assessment_template.schema.json"


def get_log_level() -> str:
    """Resolve the log level from the environment or config.yaml."""
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        return env_level.upper()
    config = load_global_config()
    return (config.log_level or DEFAULT_LOG_LEVEL).upper()
