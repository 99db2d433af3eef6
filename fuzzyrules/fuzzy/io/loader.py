from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict

import yaml

from ..core.types import FuzzyError
from ..model.knowledge import FuzzyModel
from .fz_parser import parse_fz

logger = logging.getLogger(__name__)


def _load_document(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        if path.lower().endswith((".yml", ".yaml")):
            return yaml.safe_load(f)
        return json.load(f)


def load_model(path: str) -> FuzzyModel:
    """Model from a .fz file or a YAML/JSON document, chosen by extension."""
    ext = os.path.splitext(path)[1].lower()
    logger.debug("Loading model from %s", path)
    if ext == ".fz":
        return parse_fz(path)
    if ext in (".yml", ".yaml", ".json"):
        try:
            doc = _load_document(path)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise FuzzyError(f"Cannot read model document {path}: {e}") from e
        return FuzzyModel.from_dict(doc)
    raise FuzzyError(f"Unsupported model file extension '{ext}' (use .fz, .yaml, .yml or .json)")


def load_config(path: str) -> Dict[str, Any]:
    try:
        cfg = _load_document(path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise FuzzyError(f"Cannot read config {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise FuzzyError(f"Config {path} must be a mapping")
    return cfg
