# -*- coding: utf-8 -*-
import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ngramspell.errors import InvalidConfigError

CONFIG_PATH = Path(__file__).parent / "config.yaml"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _read_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{path}: expected a mapping at top level")
    return data


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Package defaults, with the YAML file at ``path`` merged over them."""
    cfg = _read_yaml(CONFIG_PATH)
    if path is not None:
        cfg = _merge(cfg, _read_yaml(path))
    validate_config(cfg)
    return cfg


def _int_setting(cfg, section: str, key: str, minimum: int) -> int:
    value = cfg.get(section, {}).get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidConfigError(f"{section}.{key} must be an integer >= {minimum}, got {value!r}")
    return value


def validate_config(cfg: Dict[str, Any]):
    if not isinstance(cfg, dict):
        raise InvalidConfigError("configuration must be a mapping")
    for section in ("model", "corrector", "scoring", "output", "service"):
        if not isinstance(cfg.get(section, {}), dict):
            raise InvalidConfigError(f"section '{section}' must be a mapping")

    _int_setting(cfg, "model", "ngram", 1)
    _int_setting(cfg, "corrector", "max_threshold", 0)
    _int_setting(cfg, "corrector", "in_lexicon_threshold", 0)
    _int_setting(cfg, "corrector", "min_candidates", 1)
    _int_setting(cfg, "output", "suggestions", 1)
