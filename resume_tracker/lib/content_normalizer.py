"""Shape-tolerant coercion of loosely typed JSON into named/described entities.

LLM output is inconsistent about whether a badge is ``"Python"``,
``{"name": "Python"}`` or ``{"name": {"name": "Python"}}``. Everything here is
total: any input produces either a canonical dict or ``None``, never an
exception.
"""
import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(value) if value else ""
        if isinstance(value, bool):
            return json.dumps(value)
        return str(value)
    except (TypeError, ValueError) as e:
        logger.debug(f"Could not stringify {type(value).__name__}: {e}")
        return ""


def _normalize(value: Any, key: str) -> Optional[dict]:
    try:
        if isinstance(value, str):
            text = value
        elif isinstance(value, dict):
            inner = value.get(key)
            if isinstance(inner, str):
                text = inner
            elif isinstance(inner, dict) and isinstance(inner.get(key), str):
                # one level of double-wrapping only
                text = inner[key]
            elif inner:
                text = _stringify(inner)
            else:
                text = _stringify(value)
        else:
            text = _stringify(value)
    except Exception as e:
        logger.debug(f"Normalization of {key} failed: {e}")
        text = ""

    text = text.strip()
    if not text:
        return None
    return {key: text}


def _normalize_many(values: Any, key: str) -> List[dict]:
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        values = [values]
    out = []
    for value in values:
        entity = _normalize(value, key)
        if entity is not None:
            out.append(entity)
    return out


def normalize_name(value: Any) -> Optional[dict]:
    """Coerce a badge/skill/tech value to ``{"name": str}``; ``None`` when empty."""
    return _normalize(value, "name")


def normalize_description(value: Any) -> Optional[dict]:
    """Coerce a task value to ``{"description": str}``; ``None`` when empty."""
    return _normalize(value, "description")


def normalize_names(values: Any) -> List[dict]:
    return _normalize_many(values, "name")


def normalize_descriptions(values: Any) -> List[dict]:
    return _normalize_many(values, "description")


def coerce_text(value: Any) -> Optional[str]:
    """Free-text scalars: objects, arrays and booleans are JSON-serialized, ``None`` stays ``None``."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, bool)):
        try:
            return json.dumps(value)
        except (TypeError, ValueError):
            return str(value)
    return str(value)
