import logging
import os

from openai import OpenAI

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 900.0

# Module-level cache
_API_KEY = None
_CLIENT = None
_TIMEOUT = None


def _normalize_key(key):
    """Normalize API key by stripping whitespace and returning None if empty."""
    if key is None:
        return None
    key = str(key).strip()
    return key if key else None


def looks_like_api_key(key):
    """OpenAI secret keys start with "sk-"; anything shorter than 20 chars is a typo."""
    return bool(key) and key.startswith("sk-") and len(key) >= 20


def get_api_key(required=False):
    """Get the currently effective API key from cache or environment."""
    global _API_KEY

    if _API_KEY is None:
        _API_KEY = _normalize_key(os.environ.get("OPENAI_API_KEY"))

    if _API_KEY is None and required:
        raise RuntimeError("OPENAI_API_KEY not configured")

    return _API_KEY


def _read_timeout_env():
    """Read OpenAI HTTP timeout (in seconds) from environment without caching."""
    val = os.environ.get("OPENAI_TIMEOUT_SECONDS")
    try:
        t = float(val) if val is not None else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        logger.warning(f"Ignoring invalid OPENAI_TIMEOUT_SECONDS={val!r}")
        t = DEFAULT_TIMEOUT_SECONDS
    return t if t > 0 else DEFAULT_TIMEOUT_SECONDS


def get_client(required=False):
    """Get a cached OpenAI client, creating one if needed."""
    global _CLIENT, _API_KEY, _TIMEOUT

    current_timeout = _read_timeout_env()
    if _CLIENT is not None and _API_KEY is not None and _TIMEOUT == current_timeout:
        return _CLIENT

    current_key = get_api_key(required=False)
    if current_key is None or not looks_like_api_key(current_key):
        if current_key is not None:
            logger.error("OPENAI_API_KEY is set but does not look like an OpenAI secret key")
        if required:
            raise RuntimeError("OPENAI_API_KEY not configured")
        return None

    _API_KEY = current_key
    _TIMEOUT = current_timeout
    _CLIENT = OpenAI(api_key=_API_KEY, timeout=_TIMEOUT)
    return _CLIENT


def reset_client():
    """Forget the cached key and client so the next call re-reads the environment."""
    global _API_KEY, _CLIENT, _TIMEOUT
    _API_KEY = None
    _CLIENT = None
    _TIMEOUT = None
