"""
config.py
---------

Builds Credentials from the environment or a YAML file.

Environment variables (take precedence):
    SIMPLEGEO_KEY, SIMPLEGEO_SECRET, SIMPLEGEO_TOKEN, SIMPLEGEO_TOKEN_SECRET

YAML file (path argument, else $SIMPLEGEO_CONFIG, else ./simplegeo.yaml):

    simplegeo:
      key: <consumer key>
      secret: <consumer secret>
      token: ""          # optional user token
      token_secret: ""   # optional

Older files without "key" name the consumer pair token / secret; those
are read as the consumer key and secret.

Nothing here is global: callers get a Credentials value and pass it to the
Client themselves.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from loguru import logger

from simplegeo_client.models.credentials import Credentials

CONFIG_ENV = "SIMPLEGEO_CONFIG"
DEFAULT_CONFIG_FILE = "simplegeo.yaml"
SECTION = "simplegeo"

ENV_KEYS = {
    "consumer_key": "SIMPLEGEO_KEY",
    "consumer_secret": "SIMPLEGEO_SECRET",
    "token": "SIMPLEGEO_TOKEN",
    "token_secret": "SIMPLEGEO_TOKEN_SECRET",
}


def _resolve_path(path: Optional[Union[str, Path]], env: Mapping[str, str]) -> Optional[Path]:
    # Returns the file to read, or None when no config file is in play.
    if path is not None:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"SimpleGeo config file not found: {file_path}")
        return file_path

    if env.get(CONFIG_ENV):
        file_path = Path(env[CONFIG_ENV])
        if not file_path.exists():
            raise FileNotFoundError(f"SimpleGeo config file not found: {file_path} (from ${CONFIG_ENV})")
        return file_path

    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.exists() else None


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the simplegeo section of a YAML config file.

    A file without a "simplegeo:" mapping is read as the section itself.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"SimpleGeo config must be a mapping, got {type(data).__name__} in {path}")

    section = data.get(SECTION, data)
    if not isinstance(section, dict):
        raise ValueError(f"'{SECTION}' in {path} must be a mapping")

    logger.debug("Loaded SimpleGeo config from {path}", path=path)
    return section


def _from_file(section: Dict[str, Any]) -> Dict[str, str]:
    consumer_key = section.get("key", section.get("consumer_key"))
    values = {
        "consumer_key": consumer_key,
        "consumer_secret": section.get("secret", section.get("consumer_secret")),
        "token": section.get("token"),
        "token_secret": section.get("token_secret"),
    }
    # Legacy configs: "token" / "secret" named the consumer pair.
    if consumer_key is None:
        values["consumer_key"] = values.pop("token")
    return {k: str(v) for k, v in values.items() if v is not None}


def load_credentials(path: Optional[Union[str, Path]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Credentials:
    """
    Build Credentials from the environment and / or a YAML file.

    Environment variables override file values field by field. Missing
    consumer key / secret are logged, not raised; signing rejects them.
    """
    env = os.environ if env is None else env

    values: Dict[str, str] = {}
    file_path = _resolve_path(path, env)
    if file_path is not None:
        values.update(_from_file(load_yaml(file_path)))

    for field_name, env_name in ENV_KEYS.items():
        if env.get(env_name):
            values[field_name] = env[env_name]

    for field_name in ("consumer_key", "consumer_secret"):
        if not values.get(field_name):
            logger.warning(
                "SimpleGeo {field} not configured; requests will fail to sign.",
                field=field_name,
            )

    return Credentials(
        consumer_key=values.get("consumer_key", ""),
        consumer_secret=values.get("consumer_secret", ""),
        token=values.get("token", ""),
        token_secret=values.get("token_secret", ""),
    )
