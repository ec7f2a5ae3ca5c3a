"""Current-user identity with change notifications."""
from typing import Callable, List, Optional

from storefront.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

IdentityListener = Callable[[Optional[str]], None]


class IdentityProvider:
    """
    Holds the authenticated user id and role.

    Listeners are called synchronously, in subscription order, whenever the
    user id changes. A role change for the same user does not notify.

    Usage:
        identity = IdentityProvider()
        unsubscribe = identity.subscribe(store.on_identity_change)
        identity.login("u1")
        identity.logout()
        unsubscribe()
    """

    def __init__(self, user_id: Optional[str] = None, role: str = ROLE_USER):
        self._user_id = user_id or None
        self._role = role if self._user_id else None
        self._listeners: List[IdentityListener] = []

    @property
    def current(self) -> Optional[str]:
        """Current user id, or None when anonymous."""
        return self._user_id

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == ROLE_ADMIN

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def login(self, user_id: str, role: str = ROLE_USER) -> None:
        if not user_id:
            raise ValueError("user_id must be a non-empty string")
        if role not in ROLES:
            raise ValueError(f"role must be one of {ROLES}")
        self._role = role
        self._set(user_id)

    def logout(self) -> None:
        self._role = None
        self._set(None)

    def _set(self, user_id: Optional[str]) -> None:
        if user_id == self._user_id:
            return
        logger.debug(
            f"Identity change {sanitize_id_for_logging(self._user_id)} -> "
            f"{sanitize_id_for_logging(user_id)}"
        )
        self._user_id = user_id
        for listener in list(self._listeners):
            listener(user_id)
