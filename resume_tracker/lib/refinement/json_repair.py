"""Recover a JSON object from near-miss LLM output."""
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
# "key": "value<newline>  -> close the string before the line break
_UNTERMINATED_STRING_RE = re.compile(r'([{,]\s*"[^"\n]+"\s*:\s*"[^"\n]*)\n')
# "a"<newline>"b"  -> missing comma between two members
_MISSING_COMMA_RE = re.compile(r'"\s*\n(\s*)"')
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text.strip())


def repair_json_text(text: str) -> str:
    """Apply the cheap textual fixes for the usual near-miss mistakes."""
    repaired = _UNTERMINATED_STRING_RE.sub(r'\1"\n', text)
    repaired = _MISSING_COMMA_RE.sub(r'",\n\1"', repaired)
    repaired = _TRAILING_COMMA_RE.sub(r"\1", repaired)
    return repaired


def _outermost_object(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in response")
    return text[start:end + 1]


def parse_llm_json(text: Any) -> Dict[str, Any]:
    """
    Parse a model reply into a dict.

    Tries, in order: the reply as-is, the reply with code fences stripped,
    the repaired reply, and the repaired outermost ``{...}`` slice. Raises
    ``ValueError`` when none of them yields a JSON object.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty response")

    stripped = strip_code_fences(text)
    candidates = [text, stripped, repair_json_text(stripped)]
    try:
        candidates.append(repair_json_text(_outermost_object(stripped)))
    except ValueError:
        pass

    last_error = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e
            continue
        if isinstance(parsed, dict):
            return parsed
        last_error = ValueError(f"Expected a JSON object, got {type(parsed).__name__}")

    logger.debug(f"Could not recover JSON from model output: {last_error}")
    raise ValueError(f"Response is not valid JSON: {last_error}")
