"""A small curated catalog used by the store, engine and app tests.

Curations (filterable unless noted):

==== ====================== ========== ========== =====
vid  dancers                orchestra  published  views
==== ====================== ========== ========== =====
v1   Juan, Maria            Di Sarli   2024-01-01 100
v2   Juan, Maria            D'Arienzo  2024-02-01 500
v3   Juan, Carlos, Maria    Di Sarli   2024-03-01 50
v4   Carlos, Ana            Pugliese   2024-04-01 300
v5   José García, Ana       Di Sarli   2024-05-01 10
v6   (no curation)          -          2024-06-01 999
v7   (no dancers linked)    Di Sarli   2024-07-01 900
v8   Maria, Ana (x2)        D'Arienzo  2024-08-01 200
==== ====================== ========== ========== =====

v8 carries two curations: an auto-processed one and a later verified one.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from tangofinder.domain.model import (
    CurationStatus,
    Dancer,
    Orchestra,
    Performance,
    Singer,
    Song,
    Video,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

FILTERABLE_VIDEO_IDS = ("v1", "v2", "v3", "v4", "v5", "v8")
NEWEST_FIRST = ("v8", "v5", "v4", "v3", "v2", "v1")
MOST_VIEWED_FIRST = ("v2", "v4", "v8", "v1", "v3", "v5")


def make_video(video_id: str, *, month: int, views: int) -> Video:
    return Video(
        id=video_id,
        title=f"Tango video {video_id}",
        channel_title="Milonga Channel",
        channel_id="UC-milonga",
        published_at=datetime(2024, month, 1, 12, 0, tzinfo=UTC),
        view_count=views,
    )


def make_performance(
    video: Video,
    *,
    dancers: list[str],
    orchestra: str | None,
    song_title: str | None,
    year: int | None = None,
    singers: list[str] | None = None,
) -> Performance:
    performance = Performance(
        id=f"p-{video.id}",
        dancers=dancers,
        orchestra=orchestra,
        song_title=song_title,
        singers=singers or [],
        performance_year=year,
    )
    video.performance = performance
    return performance


def seed_catalog(session: Session) -> None:
    """Persist the catalog described in the module docstring."""

    juan = Dancer(name="Juan")
    maria = Dancer(name="Maria")
    carlos = Dancer(name="Carlos")
    ana = Dancer(name="Ana")
    jose = Dancer(name="José García")

    di_sarli = Orchestra(name="Di Sarli")
    darienzo = Orchestra(name="D'Arienzo")
    pugliese = Orchestra(name="Pugliese")

    bahia = Song(title="Bahía Blanca")
    cumparsita = Song(title="La Cumparsita")
    gallo = Song(title="Gallo Ciego")

    rufino = Singer(name="Roberto Rufino")

    v1 = make_video("v1", month=1, views=100)
    p1 = make_performance(
        v1, dancers=["Juan", "Maria"], orchestra="Di Sarli", song_title="Bahía Blanca", year=2023
    )
    p1.curate(orchestra=di_sarli, song=bahia, dancers=[juan, maria]).id = 1

    v2 = make_video("v2", month=2, views=500)
    p2 = make_performance(
        v2,
        dancers=["Juan", "Maria"],
        orchestra="D'Arienzo",
        song_title="La Cumparsita",
        singers=[" ", "Alberto Echagüe"],
    )
    p2.curate(orchestra=darienzo, song=cumparsita, dancers=[juan, maria]).id = 2

    v3 = make_video("v3", month=3, views=50)
    p3 = make_performance(
        v3,
        dancers=["Juan", "Carlos", "Maria"],
        orchestra="Di Sarli",
        song_title="Bahía Blanca",
        singers=["Roberto Rufino"],
    )
    p3.curate(
        orchestra=di_sarli,
        song=bahia,
        dancers=[juan, carlos, maria],
        singers=[rufino],
    ).id = 3

    v4 = make_video("v4", month=4, views=300)
    p4 = make_performance(
        v4, dancers=["Carlos", "Ana"], orchestra="Pugliese", song_title="Gallo Ciego"
    )
    p4.curate(orchestra=pugliese, song=gallo, dancers=[carlos, ana]).id = 4

    v5 = make_video("v5", month=5, views=10)
    p5 = make_performance(
        v5, dancers=["José García", "Ana"], orchestra="Di Sarli", song_title="Bahía Blanca"
    )
    p5.curate(orchestra=di_sarli, song=bahia, dancers=[jose, ana]).id = 5

    v6 = make_video("v6", month=6, views=999)
    make_performance(v6, dancers=["Juan"], orchestra="Di Sarli", song_title=None)

    v7 = make_video("v7", month=7, views=900)
    p7 = make_performance(v7, dancers=[], orchestra="Di Sarli", song_title="Gallo Ciego")
    p7.curate(orchestra=di_sarli, song=gallo, dancers=[]).id = 7

    v8 = make_video("v8", month=8, views=200)
    p8 = make_performance(
        v8, dancers=["Maria", "Ana"], orchestra="D'Arienzo", song_title="La Cumparsita"
    )
    p8.curate(orchestra=darienzo, song=cumparsita, dancers=[maria, ana]).id = 8
    p8.curate(
        orchestra=darienzo,
        song=cumparsita,
        dancers=[maria, ana],
        status=CurationStatus.VERIFIED,
        notes="Checked against the event programme",
    ).id = 9

    session.add_all([v1, v2, v3, v4, v5, v6, v7, v8])
    session.flush()
