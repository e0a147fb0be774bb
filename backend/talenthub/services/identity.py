"""
Identity provider.

Local email/password accounts with JWT bearer tokens. Accounts carry no
role; roles live in the role collections (see role_resolver).
Auth-state listeners are notified on every sign-in and sign-out.
"""

import logging
import uuid
from typing import Callable, Optional

from sqlalchemy.orm import Session

from talenthub.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    revoke_token,
    verify_password,
)
from talenthub.models import UserAccount

logger = logging.getLogger("identity")

MIN_PASSWORD_LENGTH = 6

# listener(db, uid, account); account is None on sign-out
AuthStateListener = Callable[[Optional[Session], str, Optional[UserAccount]], None]


class IdentityError(Exception):
    """Sign-up or sign-in was rejected."""


class EmailAlreadyRegisteredError(IdentityError):
    pass


class InvalidCredentialsError(IdentityError):
    pass


class IdentityProvider:
    def __init__(self):
        self._listeners: list[AuthStateListener] = []

    # ---- auth-state notifications ----

    def on_auth_state_changed(self, listener: AuthStateListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, db: Optional[Session], uid: str, account: Optional[UserAccount]) -> None:
        for listener in list(self._listeners):
            listener(db, uid, account)

    # ---- accounts ----

    @staticmethod
    def get_account(db: Session, uid: str) -> Optional[UserAccount]:
        return db.query(UserAccount).filter(UserAccount.uid == uid).first()

    @staticmethod
    def get_account_by_email(db: Session, email: str) -> Optional[UserAccount]:
        return db.query(UserAccount).filter(UserAccount.email == email.lower()).first()

    def sign_up(self, db: Session, email: str, password: str) -> UserAccount:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.get_account_by_email(db, email):
            raise EmailAlreadyRegisteredError("Email already registered")

        account = UserAccount(
            uid=uuid.uuid4().hex,
            email=email.lower(),
            hashed_password=get_password_hash(password),
        )
        db.add(account)
        db.commit()
        db.refresh(account)

        logger.info(f"Registered account {account.uid}")
        return account

    def authenticate(self, db: Session, email: str, password: str) -> UserAccount:
        """Check credentials without starting a session."""
        account = self.get_account_by_email(db, email)
        if not account or not verify_password(password, account.hashed_password):
            raise InvalidCredentialsError("Incorrect email or password")
        return account

    def sign_in(self, db: Session, email: str, password: str) -> tuple[UserAccount, str]:
        """Authenticate and issue an access token with the uid as subject."""
        account = self.authenticate(db, email, password)
        token = create_access_token(data={"sub": account.uid})
        self._notify(db, account.uid, account)
        return account, token

    def sign_out(self, token: str) -> bool:
        payload = decode_access_token(token)
        if payload is None or not revoke_token(token):
            return False
        self._notify(None, payload.get("sub"), None)
        return True

    def account_from_token(self, db: Session, token: str) -> Optional[UserAccount]:
        payload = decode_access_token(token)
        if payload is None or payload.get("sub") is None:
            return None
        return self.get_account(db, payload["sub"])


identity_provider = IdentityProvider()
