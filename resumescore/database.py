"""
SQLite-backed analysis cache.

Uses SQLAlchemy so cached job-description analyses survive between CLI runs.
Values must be JSON-serializable; callers store to_dict() payloads.
"""

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from sqlalchemy import create_engine, Column, String, Text, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker

from .logger import StructuredLogger, get_logger

Base = declarative_base()


class CachedAnalysis(Base):
    """One cached analysis payload."""

    __tablename__ = "analysis_cache"

    cache_key = Column(String, primary_key=True)  # <prefix>_<sha256>
    payload = Column(Text, nullable=False)  # JSON
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


class SqlAnalysisCache:
    """
    Same interface as AnalysisCache, persisted in SQLite.

    Each operation opens its own session. A process-local lock serializes
    writes; SQLite handles cross-process locking.
    """

    def __init__(self, db_path: Path, logger: Optional[StructuredLogger] = None):
        self.db_path = Path(db_path)
        init_database(self.db_path)
        self.engine = create_engine(f"sqlite:///{self.db_path}")
        self.Session = sessionmaker(bind=self.engine)
        self._write_lock = threading.Lock()
        self.logger = logger or get_logger()

    def get(self, key: str) -> Optional[Any]:
        with self.Session() as session:
            row = session.get(CachedAnalysis, key)
            if row is None:
                return None
            try:
                return json.loads(row.payload)
            except json.JSONDecodeError as e:
                self.logger.warning("Corrupt cache entry ignored", key=key, error=str(e))
                return None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._write_lock, self.Session() as session:
            row = session.get(CachedAnalysis, key)
            if row is None:
                session.add(CachedAnalysis(cache_key=key, payload=payload))
            else:
                row.payload = payload
            session.commit()

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        cached = self.get(key)
        if cached is not None:
            self.logger.record_cache_hit()
            return cached
        self.logger.record_cache_miss()
        value = compute()
        self.set(key, value)
        return value

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self.Session() as session:
            return session.query(CachedAnalysis).count()

    def clear(self) -> None:
        with self._write_lock, self.Session() as session:
            session.query(CachedAnalysis).delete()
            session.commit()

    def close(self) -> None:
        self.engine.dispose()
