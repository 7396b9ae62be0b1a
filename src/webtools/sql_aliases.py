"""SQL-backed alias store."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import (
    Column,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    insert,
    select,
)

from webtools.aliases import PathAlias

logger = logging.getLogger(__name__)


class SqlAliasStore:
    """Aliases in a ``path_alias`` table, queried with SQLAlchemy Core.

    The REGEXP comparison runs in the database. On SQLite, SQLAlchemy
    registers a Python-backed ``regexp`` function for it.
    """

    def __init__(self, engine: Engine, *, table_name: str = "path_alias") -> None:
        self._engine = engine
        self._metadata = MetaData()
        self._table = Table(
            table_name,
            self._metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("source", String(255), nullable=False, index=True),
            Column("alias", String(255), nullable=False, index=True),
            Column("langcode", String(12), nullable=False),
        )

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> SqlAliasStore:
        return cls(create_engine(url), **kwargs)

    def create_schema(self) -> None:
        self._metadata.create_all(self._engine)

    def add(self, source: str, alias: str, langcode: str) -> PathAlias:
        with self._engine.begin() as conn:
            conn.execute(
                insert(self._table).values(
                    source=source, alias=alias, langcode=langcode
                )
            )
        return PathAlias(source=source, alias=alias, langcode=langcode)

    def lookup_source(self, alias: str, langcode: str | None = None) -> str | None:
        table = self._table
        query = select(table.c.source).where(table.c.alias == alias)
        if langcode is not None:
            query = query.where(table.c.langcode == langcode)
        query = query.order_by(table.c.id.desc()).limit(1)
        with self._engine.connect() as conn:
            return conn.execute(query).scalar_one_or_none()

    def has_matching_alias(self, source: str, regex: str, langcode: str) -> bool:
        table = self._table
        query = (
            select(table.c.id)
            .where(table.c.source == source)
            .where(table.c.alias.regexp_match(regex))
            .where(table.c.langcode == langcode)
            .limit(1)
        )
        with self._engine.connect() as conn:
            found = conn.execute(query).first() is not None
        logger.debug(
            "Alias query for %s against %r in %s: %s", source, regex, langcode, found
        )
        return found

    def disconnect(self) -> None:
        self._engine.dispose()
