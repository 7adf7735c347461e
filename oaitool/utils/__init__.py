"""Helpers shared by the oaitool modules."""
from typing import Any, Dict

from ..config import REDACT_KEYS

REDACTED = "[REDACTED]"


def redact_sensitive_data(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a request body with credential-bearing fields masked.

    Only top level fields named in REDACT_KEYS are masked, and only when
    they are set; cluster create and patch bodies are flat.
    """
    return {
        key: REDACTED if key in REDACT_KEYS and value else value
        for key, value in payload.items()
    }
