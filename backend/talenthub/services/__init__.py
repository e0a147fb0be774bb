from talenthub.services.role_resolver import resolve_profile, find_role_record
from talenthub.services.route_guard import evaluate_route
from talenthub.services.swipe_feed import (
    get_unseen_candidates,
    record_swipe_action,
    FeedSession,
    FeedState,
    feed_sessions,
)
from talenthub.services.identity import identity_provider
from talenthub.services.session_store import session_store

__all__ = [
    "resolve_profile",
    "find_role_record",
    "evaluate_route",
    "get_unseen_candidates",
    "record_swipe_action",
    "FeedSession",
    "FeedState",
    "feed_sessions",
    "identity_provider",
    "session_store",
]
