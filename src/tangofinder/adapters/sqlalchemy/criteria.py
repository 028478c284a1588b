"""Compile curation criteria into SQLAlchemy boolean expressions."""

from __future__ import annotations

from functools import singledispatch

from sqlalchemy import ColumnElement, FromClause, and_, exists, select, true  # noqa: TC002

from tangofinder.adapters.sqlalchemy.mappings import (
    curation_table,
    dancer_curation_table,
    dancer_table,
    orchestra_table,
)
from tangofinder.domain.criteria import AllOf, HasOrchestra, IsFilterable, LinksDancer


@singledispatch
def compile_criterion(criterion: object, curation: FromClause) -> ColumnElement[bool]:
    raise TypeError(f"Unsupported criterion: {criterion!r}")


@compile_criterion.register
def _(criterion: AllOf, curation: FromClause) -> ColumnElement[bool]:
    if not criterion.criteria:
        return true()
    return and_(*(compile_criterion(child, curation) for child in criterion.criteria))


@compile_criterion.register
def _(criterion: IsFilterable, curation: FromClause) -> ColumnElement[bool]:
    _ = criterion
    link = dancer_curation_table.alias()
    return exists(select(link.c.curation_id).where(link.c.curation_id == curation.c.id))


@compile_criterion.register
def _(criterion: LinksDancer, curation: FromClause) -> ColumnElement[bool]:
    # fresh aliases per leaf: each EXISTS correlates only to the outer curation row
    link = dancer_curation_table.alias()
    dancer = dancer_table.alias()
    return exists(
        select(link.c.curation_id)
        .join(dancer, dancer.c.id == link.c.dancer_id)
        .where(link.c.curation_id == curation.c.id)
        .where(dancer.c.normalized == criterion.key)
    )


@compile_criterion.register
def _(criterion: HasOrchestra, curation: FromClause) -> ColumnElement[bool]:
    orchestra = orchestra_table.alias()
    return curation.c.orchestra_id.in_(
        select(orchestra.c.id).where(orchestra.c.normalized == criterion.key)
    )


def curation_filter(criteria: AllOf, curation: FromClause = curation_table) -> ColumnElement[bool]:
    """The WHERE clause selecting curations that satisfy ``criteria``."""

    return compile_criterion(criteria, curation)
