"""Roster persistence: every name that ever joined and the picks it made.

The session reads and writes through :class:`SessionStore` only. Writes are
synchronous and happen on every mutation; the roster is small and changes
at the pace of people pressing a button.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import json
import logging
import os
from typing import Dict, List, Optional

from sqlalchemy.exc import OperationalError, ProgrammingError, SQLAlchemyError

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The roster could not be written. Treated as fatal misconfiguration."""


@dataclass
class StoredParticipant:
    name: str
    picks: List[str] = field(default_factory=list)

    def to_dict(self):
        return {'name': self.name, 'picks': list(self.picks)}

    def copy(self) -> 'StoredParticipant':
        return StoredParticipant(name=self.name, picks=list(self.picks))


class SessionStore(ABC):
    @abstractmethod
    def load(self) -> List[StoredParticipant]:
        """Return every stored participant; empty when nothing was ever saved."""

    @abstractmethod
    def upsert_on_join(self, name: str) -> StoredParticipant:
        """Return the record for ``name``, creating and saving an empty one if new."""

    @abstractmethod
    def update_picks(self, name: str, picks: List[str]) -> None:
        """Overwrite and save the picks of ``name``. Unknown names are ignored."""

    @abstractmethod
    def clear_all(self) -> None:
        """Drop every record and save the empty roster."""


class MemorySessionStore(SessionStore):
    """Process-local roster. Nothing survives a restart."""

    def __init__(self, participants: Optional[List[StoredParticipant]] = None):
        self._records: Dict[str, StoredParticipant] = {}
        for participant in participants or []:
            self._records[participant.name] = participant.copy()
        self.writes = 0

    def load(self):
        return [p.copy() for p in self._records.values()]

    def upsert_on_join(self, name):
        record = self._records.get(name)
        if record is None:
            record = StoredParticipant(name=name)
            self._records[name] = record
            self.writes += 1
        return record.copy()

    def update_picks(self, name, picks):
        record = self._records.get(name)
        if record is None:
            return
        record.picks = list(picks)
        self.writes += 1

    def clear_all(self):
        self._records.clear()
        self.writes += 1


class JsonFileSessionStore(SessionStore):
    """Roster kept as a JSON array of ``{"name", "picks"}`` objects in one file.

    The file is read once, on first access, and rewritten whole on every
    change. A missing file is an empty roster.
    """

    def __init__(self, path: str):
        self.path = path
        self._records: Optional[List[StoredParticipant]] = None

    def _read(self) -> List[StoredParticipant]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, 'r', encoding='utf-8') as fh:
            raw = json.load(fh)
        return [
            StoredParticipant(name=item['name'], picks=list(item.get('picks') or []))
            for item in raw
        ]

    def _write(self) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as fh:
                json.dump([r.to_dict() for r in self._records], fh, indent=2)
        except OSError as exc:
            raise PersistenceError(f"cannot write roster to {self.path}: {exc}") from exc

    @property
    def records(self) -> List[StoredParticipant]:
        if self._records is None:
            self._records = self._read()
            logger.info(f"[store] loaded {len(self._records)} participant(s) from {self.path}")
        return self._records

    def _find(self, name) -> Optional[StoredParticipant]:
        return next((r for r in self.records if r.name == name), None)

    def load(self):
        return [r.copy() for r in self.records]

    def upsert_on_join(self, name):
        record = self._find(name)
        if record is None:
            record = StoredParticipant(name=name)
            self.records.append(record)
            self._write()
        return record.copy()

    def update_picks(self, name, picks):
        record = self._find(name)
        if record is None:
            return
        record.picks = list(picks)
        self._write()

    def clear_all(self):
        self._records = []
        self._write()


class SqlSessionStore(SessionStore):
    """Roster kept in the ``stored_participant`` table via Flask-SQLAlchemy.

    Every call opens its own app context so the store can be used from
    socket handlers, CLI commands and tests alike.
    """

    def __init__(self, app):
        self.app = app

    def _commit(self, what: str) -> None:
        from namepick import db
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"cannot {what}: {exc}") from exc

    def load(self):
        from namepick.models import StoredParticipant as Row
        with self.app.app_context():
            try:
                rows = Row.query.order_by(Row.id).all()
            except (OperationalError, ProgrammingError):
                # No table yet: nothing was ever stored
                from namepick import db
                db.session.rollback()
                return []
            return [StoredParticipant(name=r.name, picks=r.get_picks()) for r in rows]

    def upsert_on_join(self, name):
        from namepick import db
        from namepick.models import StoredParticipant as Row
        with self.app.app_context():
            try:
                row = Row.query.filter_by(name=name).first()
                if row is None:
                    row = Row(name=name)
                    row.set_picks([])
                    db.session.add(row)
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceError(f"cannot store participant {name!r}: {exc}") from exc
            self._commit(f"store participant {name!r}")
            return StoredParticipant(name=row.name, picks=row.get_picks())

    def update_picks(self, name, picks):
        from namepick import db
        from namepick.models import StoredParticipant as Row
        with self.app.app_context():
            try:
                row = Row.query.filter_by(name=name).first()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceError(f"cannot update picks of {name!r}: {exc}") from exc
            if row is None:
                return
            row.set_picks(picks)
            db.session.add(row)
            self._commit(f"update picks of {name!r}")

    def clear_all(self):
        from namepick import db
        from namepick.models import StoredParticipant as Row
        with self.app.app_context():
            try:
                Row.query.delete()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceError(f"cannot clear roster: {exc}") from exc
            self._commit("clear roster")
