"""Match history feature: paginated match windows."""

from .gateway import RiotMatchGateway
from .models import MatchSummary, MatchWindow, Participant, merge_matches
from .service import MatchWindowFetcher

__all__ = [
    "RiotMatchGateway",
    "MatchSummary",
    "MatchWindow",
    "Participant",
    "merge_matches",
    "MatchWindowFetcher",
]
