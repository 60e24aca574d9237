"""Input validation helpers shared by the feature services."""

from typing import Optional, Tuple

import structlog

from .exceptions import ValidationError

logger = structlog.get_logger(__name__)

# Riot ID length limits
RIOT_ID_NAME_MAX_LENGTH = 16
RIOT_ID_TAG_MAX_LENGTH = 5


def normalize_riot_id(game_name: Optional[str], tag_line: Optional[str]) -> Tuple[str, str]:
    """
    Trim and check a Riot ID.

    Case is preserved for display; upstream lookup is case-insensitive.

    Args:
        game_name: Riot ID name part
        tag_line: Riot ID tag part

    Returns:
        Tuple of trimmed (game_name, tag_line)

    Raises:
        ValidationError: If either part is missing or too long
    """
    name = (game_name or "").strip()
    tag = (tag_line or "").strip().lstrip("#")

    if not name:
        raise ValidationError("gameName parameter is required", field="game_name")
    if not tag:
        raise ValidationError("tagLine parameter is required", field="tag_line")
    if len(name) > RIOT_ID_NAME_MAX_LENGTH:
        raise ValidationError("gameName too long", field="game_name", value=name)
    if len(tag) > RIOT_ID_TAG_MAX_LENGTH:
        raise ValidationError("tagLine too long", field="tag_line", value=tag)

    return name, tag


def require_identifier(value: Optional[str], field: str) -> str:
    """Return the trimmed identifier or raise if it is empty."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} parameter is required", field=field)
    return cleaned


def validate_window(start: int, count: int, max_count: int) -> None:
    """
    Check a match-window request.

    Args:
        start: Offset into the player's match history
        count: Page size
        max_count: Largest page the upstream accepts

    Raises:
        ValidationError: If the window is out of range
    """
    if start < 0:
        raise ValidationError("start must be zero or positive", field="start", value=start)
    if count < 1 or count > max_count:
        raise ValidationError(
            f"count must be between 1 and {max_count}", field="count", value=count
        )
