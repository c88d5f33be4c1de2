"""YAML config loader with environment override for the KMA service key."""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from dorosee.config.defaults import SERVICE_KEY_ENV
from dorosee.config.schema import DoroseeConfig

SECRET_FIELDS = frozenset({"service_key"})
MASK = "***"


def load_config(path: str | Path | None = None) -> DoroseeConfig:
    """Load and validate config from a YAML file.

    A missing path or file yields the defaults. An empty kma.service_key is
    filled from DOROSEE_KMA_SERVICE_KEY.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    kma = raw.setdefault("kma", {}) or {}
    raw["kma"] = kma
    if not kma.get("service_key"):
        env_key = os.environ.get(SERVICE_KEY_ENV, "")
        if env_key:
            kma["service_key"] = env_key

    return DoroseeConfig(**raw)


def get_config_value(config: DoroseeConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'kma.timeout'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redact(data: Any) -> Any:
    """Mask every non-empty secret field in dumped config data."""
    if isinstance(data, dict):
        return {
            k: MASK if k in SECRET_FIELDS and v else redact(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [redact(v) for v in data]
    return data


def redacted_value(config: DoroseeConfig, dotted_key: str) -> str:
    """Printable config value with secrets masked. Raises KeyError."""
    value = get_config_value(config, dotted_key)
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    if isinstance(value, (dict, list)):
        return json.dumps(redact(value), indent=2, ensure_ascii=False)
    if dotted_key.rsplit(".", 1)[-1] in SECRET_FIELDS and value:
        return MASK
    return str(value)


def redacted_dump(config: DoroseeConfig) -> str:
    """JSON dump with the service key masked."""
    return json.dumps(
        redact(config.model_dump(mode="json")), indent=2, ensure_ascii=False
    )
