"""
Brand Brief Configuration

Loads brand-brief.yaml and .env and overlays BRAND_BRIEF_* environment
variables.

Usage:
    from brand_brief.config import load_config

    config = load_config()
    template_id = config.require("docs_template_id")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import dotenv_values

from brand_brief.wizard.exceptions import ConfigError
from brand_brief.wizard.logging_config import get_logger


logger = get_logger("config")

CONFIG_FILE = "brand-brief.yaml"
ENV_FILE = ".env"
DEFAULT_HOME = Path.home() / ".brand-brief"

# attribute -> (dotted YAML key, environment variable)
CONFIG_KEYS = {
    "docs_template_id": ("google.docs_template_id", "BRAND_BRIEF_DOCS_TEMPLATE_ID"),
    "sheets_id": ("google.sheets_id", "BRAND_BRIEF_SHEETS_ID"),
    "sheet_tab": ("google.sheet_tab", "BRAND_BRIEF_SHEET_TAB"),
    "credentials_path": ("google.credentials", "BRAND_BRIEF_CREDENTIALS"),
    "token_path": ("google.token", "BRAND_BRIEF_TOKEN"),
    "share_document": ("google.share_document", "BRAND_BRIEF_SHARE_DOCUMENT"),
    "submit_timeout": ("submission.timeout", "BRAND_BRIEF_SUBMIT_TIMEOUT"),
}

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class BriefConfig:
    """Resolved configuration for submitting briefs."""

    docs_template_id: str = ""
    sheets_id: str = ""
    sheet_tab: str = "Hoja 1"
    credentials_path: Path = field(default_factory=lambda: DEFAULT_HOME / "credentials.json")
    token_path: Path = field(default_factory=lambda: DEFAULT_HOME / "token.json")
    share_document: bool = True
    submit_timeout: float = 60.0
    sources: List[str] = field(default_factory=list)

    def require(self, key: str) -> Any:
        """Get a configuration value that must be set.

        Raises:
            ConfigError: if the value is empty
        """
        if key not in CONFIG_KEYS:
            raise KeyError(f"Unknown configuration key: {key}")
        value = getattr(self, key)
        if value in (None, ""):
            yaml_key, env_var = CONFIG_KEYS[key]
            raise ConfigError(
                f"Missing required configuration: {key}",
                config_key=yaml_key,
                remediation=f"Set '{yaml_key}' in {CONFIG_FILE} or {env_var} in {ENV_FILE}"
            )
        return value

    @property
    def sheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.sheets_id}/edit"


def _get_nested(data: Mapping[str, Any], key: str) -> Any:
    value: Any = data
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}", config_key=key)


def _parse_timeout(value: Any, key: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout for {key}: {value!r}", config_key=key) from None
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout:g}", config_key=key)
    return timeout


def _coerce(attribute: str, value: Any, key: str) -> Any:
    if attribute == "share_document":
        return _parse_bool(value, key)
    if attribute == "submit_timeout":
        return _parse_timeout(value, key)
    if attribute in ("credentials_path", "token_path"):
        return Path(str(value)).expanduser()
    return str(value).strip()


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}", details=str(e)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}", details=str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def load_config(
    config_path: Optional[Path] = None,
    env_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> BriefConfig:
    """Load configuration.

    Resolution order (later wins):
    1. Built-in defaults
    2. brand-brief.yaml (explicit path, or the working directory)
    3. .env file
    4. Process environment

    Args:
        config_path: YAML file; missing explicit paths raise ConfigError
        env_path: .env file (defaults to ./.env when present)
        environ: Environment mapping, defaults to os.environ

    Returns:
        BriefConfig
    """
    config = BriefConfig()
    environ = os.environ if environ is None else environ

    yaml_data: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        yaml_data = _read_yaml(config_path)
        config.sources.append(str(config_path))
    elif Path(CONFIG_FILE).exists():
        yaml_data = _read_yaml(Path(CONFIG_FILE))
        config.sources.append(CONFIG_FILE)

    env_file = env_path or Path(ENV_FILE)
    env_data: Dict[str, Optional[str]] = {}
    if env_file.exists():
        env_data = dotenv_values(env_file)
        config.sources.append(str(env_file))
        logger.debug("Loaded %s", env_file)

    for attribute, (yaml_key, env_var) in CONFIG_KEYS.items():
        value = _get_nested(yaml_data, yaml_key)
        source = yaml_key
        if env_data.get(env_var):
            value, source = env_data[env_var], env_var
        if environ.get(env_var):
            value, source = environ[env_var], env_var
        if value is not None:
            setattr(config, attribute, _coerce(attribute, value, source))

    return config
