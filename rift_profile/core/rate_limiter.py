"""Inbound request throttling for the HTTP surface.

This is unrelated to the upstream concurrency cap in ``riot_api.limiter``:
it protects our own endpoints from a single client hammering profile
lookups, each of which fans out into ~25 upstream calls.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client IP
limiter = Limiter(key_func=get_remote_address)

PROFILE_LOOKUP_LIMIT = "30/minute"
MATCH_WINDOW_LIMIT = "60/minute"
MASTERY_LOOKUP_LIMIT = "60/minute"
