"""Key-value storage used to persist the signed-in session"""

from typing import Dict, Optional, Protocol

TOKEN_KEY = "token"
USER_KEY = "user"
USER_TYPE_KEY = "userType"

SESSION_KEYS = (TOKEN_KEY, USER_KEY, USER_TYPE_KEY)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage; nothing survives a restart"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)
