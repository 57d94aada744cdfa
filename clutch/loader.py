"""Loading and saving the persisted routing document."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from clutch.models.routes import RoutingConfig

logger = logging.getLogger(__name__)

CURRENT_VERSION = 1


class ConfigLoadError(ValueError):
    """The routing document could not be turned into a RoutingConfig."""


def migrate_document(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a raw document normalized to CURRENT_VERSION."""
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Routing document must be a mapping, got {type(data).__name__}")

    document = dict(data)
    if document.get("version") is None:
        document["version"] = 1
    version = document["version"]
    if isinstance(version, bool) or not isinstance(version, int):
        raise ConfigLoadError(f"Invalid config version: {version!r}")
    if version < 1:
        raise ConfigLoadError(f"Invalid config version: {version}")
    if version > CURRENT_VERSION:
        raise ConfigLoadError(
            f"Config version {version} is newer than supported version {CURRENT_VERSION}"
        )
    return document


def parse_routing_config(data: dict[str, Any]) -> RoutingConfig:
    """Validate a raw document into a RoutingConfig."""
    document = migrate_document(data)
    try:
        return RoutingConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid routing config: {e}") from e


def load_routing_config(config_path: str | Path) -> RoutingConfig:
    """Load routing configuration from a YAML or JSON file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Routing config not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Failed to read {path}: {e}") from e

    return parse_routing_config(data)


def default_routing_config(default_target: str) -> RoutingConfig:
    return RoutingConfig(version=CURRENT_VERSION, default_target=default_target, rules=())


def load_routing_config_or_default(config_path: str | Path, default_target: str) -> RoutingConfig:
    """Load routing configuration, falling back to an empty one.

    A broken document must not stop URLs from opening, so errors are logged
    and the default configuration is returned instead.
    """
    try:
        return load_routing_config(config_path)
    except FileNotFoundError:
        logger.debug(f"No routing config at {config_path}, using defaults")
    except ConfigLoadError as e:
        logger.error(f"Config load failed: {e}")
    return default_routing_config(default_target)


def dump_routing_config(config: RoutingConfig) -> dict[str, Any]:
    """Convert a RoutingConfig to its persisted form."""
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)


def save_routing_config(config: RoutingConfig, config_path: str | Path) -> None:
    """Write routing configuration as YAML (.yaml/.yml) or JSON."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = dump_routing_config(config)

    # The target is only ever replaced by a complete file.
    tmp_path = path.with_name(f".{path.name}.tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2)
            f.write("\n")
    tmp_path.replace(path)

    logger.info(f"Saved {len(config.rules)} rule(s) to {path}")
