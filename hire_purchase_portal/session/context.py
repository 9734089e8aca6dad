"""Signed-in session: identity, user type and bearer token, persisted across restarts"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from hire_purchase_portal.domain.exceptions import NotAuthenticatedError
from hire_purchase_portal.domain.models import User, UserType
from hire_purchase_portal.domain.permissions import has_all_permissions, has_any_permission, has_permission
from hire_purchase_portal.infrastructure.clients.payloads import parse_user, user_to_payload
from hire_purchase_portal.session.storage import SESSION_KEYS, TOKEN_KEY, USER_KEY, USER_TYPE_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    user: Optional[User] = None
    user_type: Optional[UserType] = None
    token: Optional[str] = None
    is_authenticated: bool = False
    is_loading: bool = True


class SessionContext:
    """
    Holds the current identity for whichever component needs it.

    Lifecycle: `initialize()` once on startup restores a stored session,
    `set_auth()` on login, `logout()` clears memory and storage. The token
    is not validated here; the backend is the only judge of it.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.state = SessionState()

    @property
    def user(self) -> Optional[User]:
        return self.state.user

    @property
    def user_type(self) -> Optional[UserType]:
        return self.state.user_type

    @property
    def token(self) -> Optional[str]:
        return self.state.token

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def initialize(self) -> SessionState:
        """Restore the session from storage; corrupt entries are discarded"""
        token = self.storage.get(TOKEN_KEY)
        user_str = self.storage.get(USER_KEY)
        user_type = self.storage.get(USER_TYPE_KEY)

        if not (token and user_str and user_type):
            self.state = SessionState(is_loading=False)
            return self.state

        try:
            kind = UserType(user_type)
            user = parse_user(json.loads(user_str), kind)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding invalid stored session: {e}")
            self._clear_storage()
            self.state = SessionState(is_loading=False)
            return self.state

        self.state = SessionState(user=user, user_type=kind, token=token, is_authenticated=True, is_loading=False)
        logger.info("Session restored", extra={"user_id": user.id, "user_type": kind.value})
        return self.state

    def set_auth(self, user: User, user_type: UserType, token: str) -> SessionState:
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, json.dumps(user_to_payload(user)))
        self.storage.set(USER_TYPE_KEY, user_type.value)

        self.state = SessionState(user=user, user_type=user_type, token=token, is_authenticated=True, is_loading=False)
        logger.info("Signed in", extra={"user_id": user.id, "user_type": user_type.value})
        return self.state

    def logout(self) -> SessionState:
        previous = self.state.user_type
        self._clear_storage()
        self.state = SessionState(is_loading=False)
        logger.info("Signed out", extra={"user_type": previous.value if previous else None})
        return self.state

    def require_token(self) -> str:
        if not self.state.is_authenticated or not self.state.token:
            raise NotAuthenticatedError("Sign in required")
        return self.state.token

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.state.user, self.state.user_type, permission)

    def has_any_permission(self, permissions: list[str]) -> bool:
        return has_any_permission(self.state.user, self.state.user_type, permissions)

    def has_all_permissions(self, permissions: list[str]) -> bool:
        return has_all_permissions(self.state.user, self.state.user_type, permissions)

    def _clear_storage(self) -> None:
        for key in SESSION_KEYS:
            self.storage.remove(key)
