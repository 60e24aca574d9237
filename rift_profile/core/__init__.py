"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .exceptions import (
    ServiceException,
    ValidationError,
    PlayerNotFoundError,
    UpstreamUnavailableError,
    AssetUnresolvedError,
)
from .enums import Tier, AssetKind, MasterySource
from .validation import normalize_riot_id, require_identifier, validate_window

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Exceptions
    "ServiceException",
    "ValidationError",
    "PlayerNotFoundError",
    "UpstreamUnavailableError",
    "AssetUnresolvedError",
    # Enums
    "Tier",
    "AssetKind",
    "MasterySource",
    # Validation
    "normalize_riot_id",
    "require_identifier",
    "validate_window",
]
