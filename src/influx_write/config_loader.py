# src/influx_write/config_loader.py
# Loads writer settings from an optional YAML file and .env. Environment variables
# (INFLUX_URL, INFLUX_TOKEN, INFLUX_ORG, INFLUX_BUCKET) override the file.
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from .auth import Authorization
from .errors import ConfigError
from .request import WriterConfig

ENV_KEYS = {
    "url": "INFLUX_URL",
    "token": "INFLUX_TOKEN",
    "org": "INFLUX_ORG",
    "bucket": "INFLUX_BUCKET",
}


def _read_yaml(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with p.open(encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    section = cfg.get("influx", {})
    if not isinstance(section, dict):
        raise ConfigError(f"'influx' section in {path} must be a mapping")
    return section


def load_config(path: Optional[str] = None) -> WriterConfig:
    load_dotenv()  # loads .env
    settings = _read_yaml(path) if path else {}

    # merge env-overrides
    for key, env_name in ENV_KEYS.items():
        settings[key] = os.getenv(env_name, settings.get(key))

    missing = [k for k in ENV_KEYS if not settings.get(k)]
    if missing:
        raise ConfigError(f"Missing InfluxDB settings: {', '.join(missing)}")

    logger.debug("Loaded InfluxDB config: url={} org={} bucket={}", settings["url"], settings["org"], settings["bucket"])
    return WriterConfig(
        url=str(settings["url"]),
        authorization=Authorization.token(str(settings["token"])),
        org=str(settings["org"]),
        bucket=str(settings["bucket"]),
    )
