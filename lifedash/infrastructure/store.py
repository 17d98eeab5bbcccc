"""
Record storage collaborator.

String-keyed and JSON-valued. Domain collections are read whole and only
ever appended to; other keys hold a single value that is replaced on save.
Backend failures surface as StorageError.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from lifedash.config import Settings, settings
from lifedash.domain.exceptions import StorageError
from lifedash.infrastructure.database.repositories import KeyValueRepository, RecordRepository
from lifedash.infrastructure.database.session import make_session_factory

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def load(self, domain: str) -> List[dict]:
        ...

    def append(self, domain: str, record: dict) -> None:
        ...

    def load_history(self, key: str) -> List[Any]:
        ...

    def save(self, key: str, value: Any) -> None:
        ...

    def get(self, key: str) -> Optional[Any]:
        ...


def _json_copy(value: Any) -> Any:
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        raise StorageError(f"Value is not JSON-serializable: {e}") from e


class InMemoryStore:
    """Process-local store; values are JSON-copied in and out like the SQL backend"""

    def __init__(self):
        self._collections: Dict[str, List[dict]] = {}
        self._values: Dict[str, Any] = {}

    def load(self, domain: str) -> List[dict]:
        return _json_copy(self._collections.get(domain, []))

    def append(self, domain: str, record: dict) -> None:
        self._collections.setdefault(domain, []).append(_json_copy(record))

    def load_history(self, key: str) -> List[Any]:
        value = self._values.get(key)
        return _json_copy(value) if isinstance(value, list) else []

    def save(self, key: str, value: Any) -> None:
        self._values[key] = _json_copy(value)

    def get(self, key: str) -> Optional[Any]:
        return _json_copy(self._values.get(key))


class SqlAlchemyStore:
    """Store backed by the `record_entry` and `kv_value` tables"""

    def __init__(self, session_factory: Optional[sessionmaker] = None, config: Optional[Settings] = None):
        config = config or settings
        self.session_factory = session_factory or make_session_factory(config.database_url)

    def load(self, domain: str) -> List[dict]:
        try:
            with self.session_factory() as db:
                return [entry.payload for entry in RecordRepository(db).list_domain(domain)]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load {domain}: {e}") from e

    def append(self, domain: str, record: dict) -> None:
        payload = _json_copy(record)
        try:
            with self.session_factory() as db:
                RecordRepository(db).append(domain, payload)
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to append to {domain}: {e}") from e
        logger.debug("Record appended", extra={"domain": domain})

    def load_history(self, key: str) -> List[Any]:
        value = self.get(key)
        return value if isinstance(value, list) else []

    def save(self, key: str, value: Any) -> None:
        payload = _json_copy(value)
        try:
            with self.session_factory() as db:
                KeyValueRepository(db).put(key, payload)
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save {key}: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        try:
            with self.session_factory() as db:
                return KeyValueRepository(db).get(key)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e
