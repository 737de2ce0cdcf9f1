import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from stackscroll.components.sharing import validate_base_url
from stackscroll.config.models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_ENV = "STACKSCROLL_CONFIG"
DEFAULT_CONFIG_PATH = "stackscroll.yaml"

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "STACKSCROLL_STORE_URL": ("store", "url"),
    "STACKSCROLL_ANON_KEY": ("store", "anon_key"),
    "STACKSCROLL_BASE_URL": ("site", "base_url"),
    "STACKSCROLL_SESSION_PATH": ("session", "path"),
}


def _strip_fences(content: str) -> str:
    """Return the first ```yaml block if there is one, else the whole text."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def load_config(path: Path, env: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load and validate the config file, then apply environment overrides.
    A missing file means all defaults.
    Raises ValueError if the YAML or the schema is invalid.
    """
    env = os.environ if env is None else env
    data: dict = {}

    if path.exists():
        content = path.read_text()
        try:
            data = yaml.safe_load(_strip_fences(content)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax in config file: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")
    else:
        logger.info(f"No config file at {path}, using defaults")

    for var, (section, key) in ENV_OVERRIDES.items():
        if env.get(var):
            data.setdefault(section, {})[key] = env[var]

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e


def resolve_config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    return Path(env.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))


def validate_config(config: AppConfig) -> list[str]:
    """
    Validate operational requirements before startup.
    Returns a list of problems (empty if the config is usable).
    """
    problems: list[str] = []

    if config.store.backend == "supabase":
        if not config.store.url:
            problems.append("store.url (or STACKSCROLL_STORE_URL) is required for supabase")
        if not config.store.anon_key:
            problems.append("store.anon_key (or STACKSCROLL_ANON_KEY) is required for supabase")

    for error in validate_base_url(config.site.base_url):
        problems.append(f"site.base_url: {error.message}")

    return problems
