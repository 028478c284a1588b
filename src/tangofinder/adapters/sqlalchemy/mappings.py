"""SQLAlchemy table metadata and mappers for the catalog snapshot.

Table and column names follow the snapshot produced by the curation pipeline;
this package never migrates them.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from tangofinder.domain.model import (
    Curation,
    CurationStatus,
    Dancer,
    Orchestra,
    Performance,
    Singer,
    Song,
    Video,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class IsoDateTime(TypeDecorator[datetime]):
    """UTC timestamps stored as ISO-8601 text, so text ordering is time ordering."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")

    def process_result_value(self, value: str | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        parsed = datetime.fromisoformat(value.strip())
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class NameListType(TypeDecorator[list[str]]):
    """Ordered name lists stored as a JSON array (or legacy comma-separated text)."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if value is None or not value.strip():
            return []
        try:
            loaded = json.loads(value)
        except json.JSONDecodeError:
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(loaded, str):
            return [loaded]
        if not isinstance(loaded, list):
            return []
        items = cast(list[Any], loaded)
        return [item for item in items if isinstance(item, str)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables ---------------------------------------------------------------

video_table = Table(
    "videos",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("published_at", IsoDateTime(), nullable=False),
    Column("tags", Text, nullable=False, default=""),
    Column("channel_name", String, nullable=False, default=""),
    Column("channel_title", String, nullable=False),
    Column("channel_id", String, nullable=False),
    Column("duration", Integer, nullable=False, default=0),
    Column("view_count", Integer, nullable=False, default=0),
    Column("like_count", Integer, nullable=False, default=0),
    Column("comment_count", Integer, nullable=False, default=0),
)

performance_table = Table(
    "performances",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("dancers", NameListType(), nullable=True),
    Column("song_title", String, nullable=True),
    Column("orchestra", String, nullable=True),
    Column("singers", NameListType(), nullable=True),
    Column("performance_year", Integer, nullable=True),
    Column(
        "video_id",
        String,
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=False,
    ),
)

orchestra_table = Table(
    "orchestras",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("normalized", String, nullable=False, unique=True),
)

singer_table = Table(
    "singers",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("normalized", String, nullable=False, unique=True),
)

song_table = Table(
    "songs",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String, nullable=False),
    Column("normalized", String, nullable=False, unique=True),
)

dancer_table = Table(
    "dancers",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("normalized", String, nullable=False, unique=True),
)

curation_table = Table(
    "curations",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "performance_id",
        String,
        ForeignKey("performances.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("song_id", Integer, ForeignKey("songs.id"), nullable=False),
    Column("orchestra_id", Integer, ForeignKey("orchestras.id"), nullable=False),
    Column(
        "status",
        Enum(
            CurationStatus,
            native_enum=False,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=CurationStatus.AUTO_PROCESSED,
    ),
    Column("notes", Text, nullable=True),
    Index("ix_curations_performance", "performance_id"),
    Index("ix_curations_orchestra", "orchestra_id"),
)

dancer_curation_table = Table(
    "dancers_to_curations",
    mapper_registry.metadata,
    Column(
        "curation_id",
        Integer,
        ForeignKey("curations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "dancer_id",
        Integer,
        ForeignKey("dancers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("ix_dancers_to_curations_dancer", "dancer_id"),
)

singer_curation_table = Table(
    "singers_to_curations",
    mapper_registry.metadata,
    Column(
        "curation_id",
        Integer,
        ForeignKey("curations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "singer_id",
        Integer,
        ForeignKey("singers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


@cache
def start_mappers() -> orm.registry:
    """Map the catalog dataclasses onto the snapshot tables (once per process)."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Dancer, dancer_table)
    mapper_registry.map_imperatively(Orchestra, orchestra_table)
    mapper_registry.map_imperatively(Singer, singer_table)
    mapper_registry.map_imperatively(Song, song_table)

    mapper_registry.map_imperatively(
        Video,
        video_table,
        properties={
            "performance": relationship(
                Performance,
                back_populates="video",
                uselist=False,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Performance,
        performance_table,
        properties={
            "video": relationship(
                Video,
                back_populates="performance",
            ),
            "_curations": relationship(
                Curation,
                back_populates="performance",
                order_by=curation_table.c.id,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Curation,
        curation_table,
        properties={
            "performance": relationship(
                Performance,
                back_populates="_curations",
            ),
            "orchestra": relationship(Orchestra),
            "song": relationship(Song),
            "_dancers": relationship(
                Dancer,
                secondary=dancer_curation_table,
                order_by=dancer_table.c.id,
            ),
            "_singers": relationship(
                Singer,
                secondary=singer_curation_table,
                order_by=singer_table.c.id,
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create the snapshot tables; used for fixtures and fresh local databases."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
