import json
from typing import Any, Dict

from ..errors import ValueParseError


def encode(name: str, value: Dict[str, Any]) -> bytes:
    """
    Serialize a JSON object into the bytes stored under a session entry.

    Args:
        name: Entry name (used for error reporting only)
        value: JSON object

    Returns:
        UTF-8 bytes of the compact JSON text

    Raises:
        ValueParseError: If value is not a JSON-serializable object
    """
    if not isinstance(value, dict):
        raise ValueParseError(
            f"Session value '{name}' must be a JSON object, got {type(value).__name__}"
        )

    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ValueParseError(f"Session value '{name}' is not serializable: {e}") from e

    return text.encode("utf-8")


def decode(raw: bytes) -> Dict[str, Any]:
    """
    Parse session entry bytes back into a JSON object.

    Raises:
        ValueParseError: If bytes are not UTF-8 or not a JSON object
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueParseError(f"Session value is not valid UTF-8: {e}") from e

    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueParseError(f"Session value is not valid JSON: {e}") from e

    if not isinstance(value, dict):
        raise ValueParseError(
            f"Session value must be a JSON object, got {type(value).__name__}"
        )

    return value
