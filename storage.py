"""Session persistence in browser cookies."""

from datetime import datetime, timedelta
from typing import Optional, Protocol

import extra_streamlit_components as stx

from config import EMAIL_COOKIE_NAME, SESSION_COOKIE_TTL_DAYS, TOKEN_COOKIE_NAME
from models import Session


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class CookieStorage:
    """Durable browser storage backed by a CookieManager component."""

    def __init__(self, cookie_manager: stx.CookieManager, ttl_days: int = SESSION_COOKIE_TTL_DAYS):
        self.cookie_manager = cookie_manager
        self.ttl_days = ttl_days

    def get(self, key: str) -> Optional[str]:
        return self.cookie_manager.get(key)

    def set(self, key: str, value: str) -> None:
        # Each cookie call renders a component; keys must be unique per run.
        self.cookie_manager.set(
            key,
            value,
            expires_at=datetime.utcnow() + timedelta(days=self.ttl_days),
            same_site="lax",
            key=f"set-{key}",
        )

    def delete(self, key: str) -> None:
        if self.cookie_manager.get(key) is None:
            return
        self.cookie_manager.delete(key, key=f"delete-{key}")


class SessionStore:
    """Load, save and clear the Session under fixed storage keys."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def load(self) -> Session:
        token = self.storage.get(TOKEN_COOKIE_NAME)
        email = self.storage.get(EMAIL_COOKIE_NAME)
        # Anything that is not a usable string is treated as logged out.
        if not isinstance(token, str) or not token.strip():
            return Session()
        return Session(token=token, email=email if isinstance(email, str) else None)

    def save(self, session: Session) -> None:
        self.storage.set(TOKEN_COOKIE_NAME, session.token or "")
        self.storage.set(EMAIL_COOKIE_NAME, session.email or "")

    def clear(self) -> None:
        self.storage.delete(TOKEN_COOKIE_NAME)
        self.storage.delete(EMAIL_COOKIE_NAME)
