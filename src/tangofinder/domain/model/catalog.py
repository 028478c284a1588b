"""Catalog entities as read from the curated tango video snapshot.

Ownership mirrors the upstream curation pipeline:
- Video owns at most one Performance
- Performance owns its Curations
- Curation links Dancers and Singers through join rows

Nothing in this package writes these objects back; they are mapped onto the
snapshot tables and only ever loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tangofinder.domain.model.enums import CurationStatus
from tangofinder.domain.normalization import normalize

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class NamedEntity:
    """Dancer/orchestra/singer shape: display name plus its canonical key."""

    id: int | None = None
    name: str
    normalized: str = ""

    def __post_init__(self) -> None:
        if not self.normalized:
            self.normalized = normalize(self.name)


@dataclass(eq=False, kw_only=True)
class Dancer(NamedEntity): ...


@dataclass(eq=False, kw_only=True)
class Orchestra(NamedEntity): ...


@dataclass(eq=False, kw_only=True)
class Singer(NamedEntity): ...


@dataclass(eq=False, kw_only=True)
class Song:
    id: int | None = None
    title: str
    normalized: str = ""

    def __post_init__(self) -> None:
        if not self.normalized:
            self.normalized = normalize(self.title)


@dataclass(eq=False, kw_only=True)
class Video:
    id: str
    title: str
    channel_title: str
    channel_id: str
    published_at: datetime
    view_count: int = 0
    description: str = ""
    channel_name: str = ""
    tags: str = ""
    duration: int = 0
    like_count: int = 0
    comment_count: int = 0

    performance: Performance | None = field(default=None, repr=False)

    @property
    def curations(self) -> tuple[Curation, ...]:
        if self.performance is None:
            return ()
        return self.performance.curations

    @property
    def latest_curation(self) -> Curation | None:
        """The most recently created curation (highest id), if any."""

        curations = [c for c in self.curations if c.id is not None]
        if not curations:
            return None
        return max(curations, key=lambda c: c.id or 0)


@dataclass(eq=False, kw_only=True)
class Performance:
    id: str
    video_id: str | None = None
    dancers: list[str] = field(default_factory=list[str])
    orchestra: str | None = None
    song_title: str | None = None
    singers: list[str] = field(default_factory=list[str])
    performance_year: int | None = None

    video: Video | None = field(default=None, repr=False)
    _curations: list[Curation] = field(default_factory=list["Curation"], repr=False)

    @property
    def curations(self) -> tuple[Curation, ...]:
        return tuple(self._curations)

    def curate(
        self,
        *,
        orchestra: Orchestra,
        song: Song,
        dancers: list[Dancer],
        singers: list[Singer] | None = None,
        status: CurationStatus = CurationStatus.AUTO_PROCESSED,
        notes: str | None = None,
    ) -> Curation:
        """Attach a curation to this performance (used when building fixtures)."""

        curation = Curation(
            orchestra=orchestra,
            song=song,
            status=status,
            notes=notes,
        )
        for dancer in dancers:
            curation.link_dancer(dancer)
        for singer in singers or ():
            curation.link_singer(singer)
        self._curations.append(curation)
        if curation.performance is None:
            curation.performance = self
        return curation


@dataclass(eq=False, kw_only=True)
class Curation:
    id: int | None = None
    status: CurationStatus = CurationStatus.AUTO_PROCESSED
    notes: str | None = None

    performance: Performance | None = field(default=None, repr=False)
    orchestra: Orchestra | None = field(default=None, repr=False)
    song: Song | None = field(default=None, repr=False)
    _dancers: list[Dancer] = field(default_factory=list[Dancer], repr=False)
    _singers: list[Singer] = field(default_factory=list[Singer], repr=False)

    @property
    def dancers(self) -> tuple[Dancer, ...]:
        return tuple(self._dancers)

    @property
    def singers(self) -> tuple[Singer, ...]:
        return tuple(self._singers)

    def link_dancer(self, dancer: Dancer) -> None:
        if any(existing is dancer for existing in self._dancers):
            return
        self._dancers.append(dancer)

    def link_singer(self, singer: Singer) -> None:
        if any(existing is singer for existing in self._singers):
            return
        self._singers.append(singer)
