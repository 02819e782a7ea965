from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ruamel.yaml import YAML

from .errors import ValidationError

DEFAULT_KEY = "ls_notebooks_v1"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
CONFIG_ENV = "PAGEBOOK_CONFIG"
HOME_ENV = "PAGEBOOK_HOME"


def _default_dir() -> Path:
    return Path(os.environ.get(HOME_ENV) or Path.home() / ".pagebook")


@dataclass
class Config:
    """Runtime settings.

    storage_dir: directory holding the slot file.
    storage_key: slot key, also the slot file's stem.
    quota_bytes: maximum stored size; None disables the check.
    validate_selection: correct a dangling selectedId on import.
    """

    storage_dir: Path = field(default_factory=_default_dir)
    storage_key: str = DEFAULT_KEY
    quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES
    validate_selection: bool = False


def _section(data: Dict, name: str) -> Dict:
    sec = data.get(name) or {}
    if not isinstance(sec, dict):
        raise ValidationError(f"Config section '{name}' must be a mapping")
    return sec


def config_from_mapping(data: object) -> Config:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Config document must be a mapping")
    cfg = Config()
    storage = _section(data, "storage")
    imp = _section(data, "import")

    if storage.get("dir") is not None and not os.environ.get(HOME_ENV):
        cfg.storage_dir = Path(str(storage["dir"])).expanduser()
    if "key" in storage:
        key = storage["key"]
        if not isinstance(key, str) or not key.strip():
            raise ValidationError("storage.key must be a non-empty string")
        cfg.storage_key = key.strip()
    if "quota_bytes" in storage:
        quota = storage["quota_bytes"]
        if quota is not None and (isinstance(quota, bool) or not isinstance(quota, int)):
            raise ValidationError("storage.quota_bytes must be an integer or null")
        cfg.quota_bytes = quota
    if "validate_selection" in imp:
        flag = imp["validate_selection"]
        if not isinstance(flag, bool):
            raise ValidationError("import.validate_selection must be true or false")
        cfg.validate_selection = flag
    return cfg


def load_config(path: Optional[str] = None) -> Config:
    """Read YAML settings from ``path`` or $PAGEBOOK_CONFIG; defaults otherwise."""
    path = path or os.environ.get(CONFIG_ENV)
    if not path:
        return config_from_mapping({})
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(f"Cannot read config {path}: {e}") from e
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(text)
    except Exception as e:  # noqa: BLE001
        raise ValidationError(f"Invalid YAML in config {path}: {e}") from e
    return config_from_mapping(data)
