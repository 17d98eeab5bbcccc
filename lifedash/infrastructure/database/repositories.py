"""Data access layer for record collections and key-value slots"""

from typing import Any, List, Optional

from sqlalchemy.orm import Session

from lifedash.infrastructure.database.models import KeyValue, RecordEntry


class RecordRepository:
    """Append-only domain collections"""

    def __init__(self, db: Session):
        self.db = db

    def append(self, domain: str, payload: dict) -> RecordEntry:
        entry = RecordEntry(domain=domain, payload=payload)
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_domain(self, domain: str) -> List[RecordEntry]:
        """Every record of a domain in append order"""
        return (
            self.db.query(RecordEntry)
            .filter(RecordEntry.domain == domain)
            .order_by(RecordEntry.seq.asc())
            .all()
        )


class KeyValueRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[Any]:
        row = self.db.get(KeyValue, key)
        return row.value if row is not None else None

    def put(self, key: str, value: Any) -> None:
        row = self.db.get(KeyValue, key)
        if row is None:
            self.db.add(KeyValue(key=key, value=value))
        else:
            row.value = value
        self.db.flush()
