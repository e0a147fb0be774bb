"""
Session store.

Tracks the signed-in accounts and their resolved profiles. Follows the
identity provider's auth-state notifications between init() and dispose(),
and notifies its own subscribers with (user, profile) whenever a session
starts, ends or its profile changes.

Sessions are keyed by uid and replaced on every sync, so the store holds at
most one entry per account that has signed in since startup.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from talenthub.models import UserAccount
from talenthub.schemas.profile import UserProfile
from talenthub.services.identity import IdentityProvider, identity_provider
from talenthub.services.role_resolver import resolve_profile

logger = logging.getLogger("session_store")


@dataclass
class SessionUser:
    uid: str
    email: str


@dataclass
class AuthSession:
    user: SessionUser
    profile: Optional[UserProfile]

    @property
    def has_role(self) -> bool:
        return self.profile is not None and not self.profile.provisional


# listener(user, profile); both None when a session ends
SessionListener = Callable[[Optional[SessionUser], Optional[UserProfile]], None]


class SessionStore:
    def __init__(
        self,
        provider: IdentityProvider,
        resolver: Callable[..., Optional[UserProfile]] = resolve_profile,
    ):
        self.provider = provider
        self.resolver = resolver
        self._sessions: dict[str, AuthSession] = {}
        self._listeners: list[SessionListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def init(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.provider.on_auth_state_changed(self._on_auth_state_changed)

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._sessions.clear()
        self._listeners.clear()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get(self, uid: str) -> Optional[AuthSession]:
        return self._sessions.get(uid)

    def sync(self, db: Session, account: UserAccount) -> AuthSession:
        """
        Re-resolve the profile for an account and store the session.

        Subscribers are notified only when the session is new or the
        resolved profile differs from the stored one.
        """
        profile = self.resolver(db, account.uid, account.email)
        user = SessionUser(uid=account.uid, email=account.email)
        previous = self._sessions.get(account.uid)

        session = AuthSession(user=user, profile=profile)
        self._sessions[account.uid] = session

        if previous is None or previous.profile != profile:
            self._emit(user, profile)
        return session

    def end(self, uid: str) -> None:
        if self._sessions.pop(uid, None) is not None:
            logger.debug(f"Session ended for {uid}")
            self._emit(None, None)

    def _on_auth_state_changed(
        self,
        db: Optional[Session],
        uid: str,
        account: Optional[UserAccount],
    ) -> None:
        if account is None:
            self.end(uid)
        elif db is not None:
            self.sync(db, account)

    def _emit(self, user: Optional[SessionUser], profile: Optional[UserProfile]) -> None:
        for listener in list(self._listeners):
            try:
                listener(user, profile)
            except Exception as e:
                logger.error(f"Session listener failed: {str(e)}")


session_store = SessionStore(identity_provider)
