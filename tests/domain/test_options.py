from __future__ import annotations

from tangofinder.adapters.sqlalchemy import SqlAlchemyCatalogStore  # noqa: TC001
from tangofinder.domain.model import ANY, FilterOption
from tangofinder.domain.options import (
    rank_options,
    resolve_dancer_options,
    resolve_orchestra_options,
)


def _pairs(options: list[FilterOption]) -> list[tuple[str, int]]:
    return [(option.name, option.count) for option in options]


def test_rank_options_orders_by_count_then_normalized_name() -> None:
    ranked = rank_options(
        [
            FilterOption(id=3, name="Maria", count=2),
            FilterOption(id=1, name="Álvaro", count=2),
            FilterOption(id=2, name="Nobody", count=0),
            FilterOption(id=4, name="Juan", count=5),
        ]
    )

    assert [option.name for option in ranked] == ["Juan", "Álvaro", "Maria"]


def test_dancer_options_without_filters(catalog_store: SqlAlchemyCatalogStore) -> None:
    options = resolve_dancer_options(catalog_store, ANY, ANY)

    assert _pairs(options) == [
        ("Maria", 5),
        ("Ana", 4),
        ("Juan", 3),
        ("Carlos", 2),
        ("José García", 1),
    ]
    assert all(option.count > 0 for option in options)


def test_dancer_options_narrow_to_partners(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert _pairs(resolve_dancer_options(catalog_store, "Juan", ANY)) == [
        ("Maria", 3),
        ("Carlos", 1),
    ]


def test_dancer_options_are_symmetric(catalog_store: SqlAlchemyCatalogStore) -> None:
    juan_partners = {o.name for o in resolve_dancer_options(catalog_store, "Juan", ANY)}
    maria_partners = {o.name for o in resolve_dancer_options(catalog_store, "Maria", ANY)}

    assert "Maria" in juan_partners
    assert "Juan" in maria_partners
    assert "Juan" not in juan_partners


def test_partner_counts_are_symmetric(catalog_store: SqlAlchemyCatalogStore) -> None:
    names = [option.name for option in resolve_dancer_options(catalog_store, ANY, ANY)]
    partners = {
        name: dict(_pairs(resolve_dancer_options(catalog_store, name, ANY))) for name in names
    }

    for first in names:
        for second, count in partners[first].items():
            assert partners[second].get(first) == count, (first, second)
    assert partners["Maria"]["Ana"] == partners["Ana"]["Maria"] == 2
    assert partners["Juan"]["Maria"] == partners["Maria"]["Juan"] == 3


def test_dancer_options_with_partner_and_orchestra(
    catalog_store: SqlAlchemyCatalogStore,
) -> None:
    assert _pairs(resolve_dancer_options(catalog_store, "juan", "Di Sarli")) == [
        ("Maria", 2),
        ("Carlos", 1),
    ]


def test_dancer_options_match_orchestra_loosely(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert _pairs(resolve_dancer_options(catalog_store, ANY, "DI SARLI ")) == [
        ("Juan", 2),
        ("Maria", 2),
        ("Ana", 1),
        ("Carlos", 1),
        ("José García", 1),
    ]


def test_dancer_options_for_accented_partner(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert _pairs(resolve_dancer_options(catalog_store, "jose garcia", ANY)) == [("Ana", 1)]


def test_unknown_partner_yields_no_options(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert resolve_dancer_options(catalog_store, "Nobody", ANY) == []


def test_orchestra_options_without_filters(catalog_store: SqlAlchemyCatalogStore) -> None:
    # the Di Sarli curation without linked dancers is not counted
    assert _pairs(resolve_orchestra_options(catalog_store, ANY, ANY)) == [
        ("D'Arienzo", 3),
        ("Di Sarli", 3),
        ("Pugliese", 1),
    ]


def test_orchestra_options_for_one_dancer(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert _pairs(resolve_orchestra_options(catalog_store, "Juan", ANY)) == [
        ("Di Sarli", 2),
        ("D'Arienzo", 1),
    ]


def test_orchestra_options_require_co_occurrence(catalog_store: SqlAlchemyCatalogStore) -> None:
    assert _pairs(resolve_orchestra_options(catalog_store, "Juan", "Maria")) == [
        ("Di Sarli", 2),
        ("D'Arienzo", 1),
    ]
    assert resolve_orchestra_options(catalog_store, "Juan", "Ana") == []


def test_orchestra_options_ignore_dancer_slot_order(
    catalog_store: SqlAlchemyCatalogStore,
) -> None:
    assert resolve_orchestra_options(
        catalog_store, "Carlos", "Maria"
    ) == resolve_orchestra_options(catalog_store, "Maria", "Carlos")
