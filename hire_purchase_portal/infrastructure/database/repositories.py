"""Data access layer for persisted client state"""

from typing import Optional
from sqlalchemy.orm import sessionmaker

from hire_purchase_portal.infrastructure.database.models import StorageEntry


class StorageRepository:
    """Durable key-value storage on a single table; each call commits on its own"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            db.merge(StorageEntry(key=key, value=value))
            db.commit()

    def remove(self, key: str) -> None:
        with self.session_factory() as db:
            db.query(StorageEntry).filter(StorageEntry.key == key).delete()
            db.commit()
