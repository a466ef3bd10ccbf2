import logging
import os
from datetime import datetime
from typing import Optional

from django.conf import settings

logger = logging.getLogger(__name__)

# Short tokens used in prompt log filenames
IDENTIFIER_KEYS = {
    "resume_id": "r",
    "user_id": "u",
    "job_application_id": "ja",
}


def write_prompt_to_file(
    prompt: str, kind: str, identifiers: Optional[dict] = None, directory: Optional[str] = None
) -> str:
    """
    Write a prompt to disk with consistent naming and location.

    Args:
        prompt: The prompt text to write
        kind: Type of prompt (e.g., "refine")
        identifiers: Dict of ID values for filename generation
        directory: Override directory (defaults to the PROMPT_LOG_DIR setting;
            a falsy setting disables logging)

    Returns:
        Full path to written file, or empty string when disabled or on failure
    """
    if directory is None:
        directory = getattr(settings, "PROMPT_LOG_DIR", None)
    if not directory:
        return ""

    try:
        os.makedirs(directory, exist_ok=True)

        now = datetime.utcnow()
        timestamp = now.strftime("%Y%m%d_%H%M%S") + f"{now.microsecond // 1000:03d}"

        parts = []
        for key, value in (identifiers or {}).items():
            if value is None:
                continue
            short_key = IDENTIFIER_KEYS.get(key, key)
            sanitized_key = "".join(c for c in short_key if c.isalnum() or c in "-_")
            if sanitized_key:
                parts.append(f"{sanitized_key}{value}")
        id_suffix = "_" + "_".join(parts) if parts else ""

        filepath = os.path.join(directory, f"{timestamp}_{kind}{id_suffix}.md")
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(prompt)
        return filepath

    except OSError as e:
        # Never break request handling over a log file
        logger.warning(f"Could not write {kind} prompt log: {e}")
        return ""
