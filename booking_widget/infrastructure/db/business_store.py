from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from booking_widget.application.exceptions import StorageError
from booking_widget.application.ports.business_store import BusinessStorePort
from booking_widget.domain.entities.business import BusinessRecord
from booking_widget.infrastructure.db.models import Base, BusinessRow


class SqlBusinessStore(BusinessStorePort):
    def __init__(self, database_url: str | None = None, engine: Engine | None = None) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required")
            _ensure_sqlite_dir(database_url)
            engine = create_engine(database_url, future=True)
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        self._logger = logging.getLogger(__name__)

    def init_schema(self) -> None:
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Schema creation failed: {e}") from e

    def get(self, slug: str) -> BusinessRecord | None:
        try:
            with self._session_factory() as session:
                row = session.get(BusinessRow, slug)
                return _to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            self._logger.error("Business lookup failed", extra={"business_slug": slug, "reason": str(e)})
            raise StorageError(f"Business lookup failed: {e}") from e

    def upsert(self, record: BusinessRecord) -> BusinessRecord:
        try:
            with self._session_factory() as session, session.begin():
                row = session.get(BusinessRow, record.slug)
                if row is None:
                    row = BusinessRow(slug=record.slug)
                    session.add(row)
                row.name = record.name
                row.description = record.description
                row.address = record.address
                row.map_url = record.map_url
                row.business_type = record.business_type
                row.contact_email = record.contact_email
                row.timezone = record.timezone
                row.services = list(record.services or [])
                row.hours = dict(record.hours or {})
                row.rules = dict(record.rules or {})
            self._logger.info("Business upserted", extra={"business_slug": record.slug})
            return record
        except SQLAlchemyError as e:
            self._logger.error("Business upsert failed", extra={"business_slug": record.slug, "reason": str(e)})
            raise StorageError(f"Business upsert failed: {e}") from e


def _to_record(row: BusinessRow) -> BusinessRecord:
    return BusinessRecord(
        slug=row.slug,
        name=row.name,
        description=row.description,
        address=row.address,
        map_url=row.map_url,
        business_type=row.business_type,
        contact_email=row.contact_email,
        timezone=row.timezone,
        services=list(row.services or []),
        hours=dict(row.hours or {}),
        rules=dict(row.rules or {}),
    )


def _ensure_sqlite_dir(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
