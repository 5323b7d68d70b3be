import os
import re
from dataclasses import dataclass, fields
from typing import List, Optional

import yaml

from equivcols.core.equiv import DEFAULT_REL_TOL, DEFAULT_TREAT_LABELED_AS_FREETEXT

_pattern = re.compile(r".*?\${(\w+)}.*?")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class EquivConfig:
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT
    rel_tol: float = DEFAULT_REL_TOL
    verbose: bool = False
    columns: Optional[List[str]] = None


def _replace_env_vars(obj):
    """Recursively replace ${VAR} with os.environ['VAR'] if present."""
    if isinstance(obj, str):
        matches = _pattern.findall(obj)
        for m in matches:
            val = os.environ.get(m, f"${{{m}}}")  # leave as-is if not found
            obj = obj.replace(f"${{{m}}}", val)
        return obj
    elif isinstance(obj, list):
        return [_replace_env_vars(i) for i in obj]
    elif isinstance(obj, dict):
        return {k: _replace_env_vars(v) for k, v in obj.items()}
    else:
        return obj


def load_yaml_with_env(path):
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return _replace_env_vars(raw)


def _as_bool(key, v):
    if isinstance(v, bool):
        return v
    if isinstance(v, str) and v.strip().lower() in _TRUE | _FALSE:
        return v.strip().lower() in _TRUE
    raise ValueError(f"{key}: expected a boolean, got {v!r}")


def load_config(path=None) -> EquivConfig:
    """
    Read an EquivConfig from YAML. Missing path/file or an empty file gives defaults.
    Values may reference environment variables as ${VAR}.
    """
    if path is None or not os.path.exists(path):
        return EquivConfig()
    raw = load_yaml_with_env(path)
    if raw is None:
        return EquivConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(EquivConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")

    cfg = EquivConfig()
    if "treat_labeled_as_freetext_equivalent" in raw:
        cfg.treat_labeled_as_freetext_equivalent = _as_bool(
            "treat_labeled_as_freetext_equivalent", raw["treat_labeled_as_freetext_equivalent"]
        )
    if "verbose" in raw:
        cfg.verbose = _as_bool("verbose", raw["verbose"])
    if "rel_tol" in raw:
        cfg.rel_tol = float(raw["rel_tol"])
    if raw.get("columns") is not None:
        cols = raw["columns"]
        if isinstance(cols, str):
            cols = [c.strip() for c in cols.split(",") if c.strip()]
        cfg.columns = [str(c) for c in cols]
    return cfg
