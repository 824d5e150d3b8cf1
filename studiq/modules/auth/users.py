"""Non-authenticating sign-in stub and the persisted user record.

Nothing here verifies credentials: signing in simply records who is studying
so the study features can be switched on. The record is stored as JSON under
a single fixed key.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ValidationError

from studiq.core.logging import get_logger
from studiq.core.storage import KeyValueStore

logger = get_logger(__name__)

USER_STORAGE_KEY = "studiq_user"


class User(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


def _avatar_for(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/100/100"


class AuthService:
    def __init__(self, store: KeyValueStore, *, key: str = USER_STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def restore(self) -> Optional[User]:
        """Read the stored user; corrupt data means no session."""
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError as e:
            logger.error("Failed to parse stored user session: %s", e)
            return None

    def _persist(self, user: User) -> User:
        self.store.set(self.key, user.model_dump_json())
        return user

    def login(self, *, email: str, name: Optional[str] = None) -> User:
        display = (name or "").strip() or email.split("@")[0]
        return self._persist(
            User(id="1", name=display, email=email, avatar=_avatar_for(email))
        )

    def login_with_google(self) -> User:
        return self._persist(
            User(
                id="google-user",
                name="Google Scholar",
                email="scholar@gmail.com",
                avatar=_avatar_for("google"),
            )
        )

    def logout(self) -> None:
        self.store.delete(self.key)
