import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from graphcms.core.errors import ConfigError
from graphcms.settings.models import CmsSettings, StoreConfig

ENV_STORE_URL = "GRAPHCMS_STORE_URL"
ENV_API_KEY = "GRAPHCMS_STORE_API_KEY"
ENV_API_PREFIX = "GRAPHCMS_API_PREFIX"


def _extract_yaml(content: str) -> str:
    """Return the first ```yaml fenced block, or the whole text if none."""
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

    return "\n".join(yaml_lines) if found_block else content


def load_settings(path: Path) -> CmsSettings:
    """
    Load and validate the settings file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in settings file: {e}") from e

    try:
        return CmsSettings.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Settings validation failed:\n{e}") from e


def load_store_config(
    env: Mapping[str, str] | None = None,
    settings: CmsSettings | None = None,
) -> StoreConfig:
    """
    Build store connection config from the environment.

    The prefix comes from GRAPHCMS_API_PREFIX, else the settings file, else
    the default.

    Raises:
        ConfigError: If the URL or the API key is not set.
    """
    env = os.environ if env is None else env
    settings = settings or CmsSettings()

    base_url = env.get(ENV_STORE_URL)
    if not base_url:
        raise ConfigError(f"{ENV_STORE_URL} environment variable is not set")
    api_key = env.get(ENV_API_KEY)
    if not api_key:
        raise ConfigError(f"{ENV_API_KEY} environment variable is not set")

    try:
        return StoreConfig(
            base_url=base_url,
            api_key=api_key,
            api_prefix=env.get(ENV_API_PREFIX) or settings.store.api_prefix,
            timeout_seconds=settings.store.timeout_seconds,
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid store configuration:\n{e}") from e
