"""
app/mappers/column_resolver.py

Pattern-based column resolution for ad platform exports.

Each semantic field owns an ordered list of case-insensitive patterns.
Patterns are tried in priority order and the first column matched by the
first pattern that matches anything wins. A field that no pattern matches
is treated as absent (``None``), never as an error.

Header conventions covered: Meta Ads Manager (EN and LV), Meta Graph API
snake_case fields, and generic "Cost"/"Spend" style exports.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from re import Pattern
from typing import Iterable, Mapping, Sequence

from app.domain.ad_rows import EntityLevel, SemanticField


def _compile(*patterns: str) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


DEFAULT_FIELD_PATTERNS: dict[SemanticField, tuple[Pattern[str], ...]] = {
    SemanticField.SPEND: _compile(
        r"^amount spent",
        r"^amount_spent$",
        r"^spend$",
        r"^spend \(",
        r"^cost$",
        r"^cost \(",
        r"^iztērētā summa",
        r"^summa$",
    ),
    SemanticField.IMPRESSIONS: _compile(
        r"^impressions$",
        r"^imps$",
        r"^parādījumi$",
        r"^rādījumi$",
    ),
    SemanticField.CLICKS: _compile(
        r"^clicks \(all\)$",
        r"^clicks$",
        r"^klikšķi \(visi\)$",
        r"^klikšķi$",
        # exports without an all-clicks column
        r"^link clicks$",
        r"^link_clicks$",
    ),
    SemanticField.LINK_CLICKS: _compile(
        r"^link clicks$",
        r"^link_clicks$",
        r"^saites klikšķi$",
    ),
    SemanticField.FREQUENCY: _compile(
        r"^frequency$",
        r"^biežums$",
    ),
    SemanticField.REVENUE: _compile(
        r"purchase.*value",
        r"conversion.*value",
        r"^revenue$",
        r"^total value$",
        r"pirkumu.*vērtība",
        r"^ieņēmumi$",
    ),
    SemanticField.PURCHASES: _compile(
        r"^purchases?$",
        r"^website purchases$",
        r"^pirkumi$",
    ),
    SemanticField.LEADS: _compile(
        r"^leads?$",
        r"^website leads?$",
        r"^potenciālie klienti$",
        r"^piesaistes$",
    ),
    SemanticField.GENERIC_CONVERSIONS: _compile(
        r"^results$",
        r"^conversions?$",
        r"^total conversions$",
        r"^rezultāti$",
    ),
    SemanticField.LANDING_PAGE_VIEWS: _compile(
        r"^landing page views$",
        r"^landing_page_views$",
        r"^galvenās lapas skatījumi$",
    ),
    SemanticField.DATE: _compile(
        r"date|day|starts|datums|laiks",
    ),
}

DEFAULT_ENTITY_PATTERNS: tuple[tuple[EntityLevel, tuple[Pattern[str], ...]], ...] = (
    (EntityLevel.ADS, _compile(r"^ad[ _]?id$", r"^creative[ _]?id$")),
    (EntityLevel.ADS, _compile(r"^ad[ _]?name$", r"^creative[ _]?name$", r"^reklāmas nosaukums$")),
    (EntityLevel.AD_SETS, _compile(r"^ad[ _]?set[ _]?id$", r"^adset_id$")),
    (EntityLevel.AD_SETS, _compile(r"^ad[ _]?set[ _]?name$", r"^adset_name$", r"^reklāmas kopas nosaukums$")),
    (EntityLevel.CAMPAIGNS, _compile(r"^campaign[ _]?id$")),
    (EntityLevel.CAMPAIGNS, _compile(r"^campaign[ _]?name$", r"^kampaņas nosaukums$")),
)


def resolve_column(columns: Sequence[str], patterns: Iterable[Pattern[str]]) -> str | None:
    """
    Return the first column matched by the highest-priority matching pattern.

    Later patterns are only consulted when every earlier pattern matched
    zero columns. Returns ``None`` when nothing matches.
    """

    for pattern in patterns:
        for column in columns:
            if pattern.search(column):
                return column
    return None


@dataclass(frozen=True)
class ColumnResolution:
    """
    Resolved semantic-field-to-column lookup for one dataset schema.
    """

    columns: tuple[str, ...]
    fields: Mapping[SemanticField, str | None]
    entity_column: str | None = None
    entity_level: EntityLevel | None = None
    unresolved: tuple[SemanticField, ...] = field(default=())

    def column_for(self, semantic_field: SemanticField) -> str | None:
        return self.fields.get(semantic_field)

    def has(self, semantic_field: SemanticField) -> bool:
        return self.fields.get(semantic_field) is not None

    def has_conversion_signal(self) -> bool:
        return any(
            self.has(item)
            for item in (
                SemanticField.PURCHASES,
                SemanticField.LEADS,
                SemanticField.GENERIC_CONVERSIONS,
            )
        )


class ColumnResolver:
    """
    Resolves dataset schemas into semantic column lookups.

    Resolution is memoized per schema (the ordered column tuple), so a
    schema is pattern-matched at most once per resolver instance.
    """

    def __init__(
        self,
        *,
        field_patterns: Mapping[SemanticField, Sequence[Pattern[str]]] | None = None,
        entity_patterns: Sequence[tuple[EntityLevel, Sequence[Pattern[str]]]] | None = None,
    ) -> None:
        self._field_patterns: dict[SemanticField, tuple[Pattern[str], ...]] = {
            semantic_field: tuple(patterns)
            for semantic_field, patterns in (field_patterns or DEFAULT_FIELD_PATTERNS).items()
        }
        self._entity_patterns = tuple(
            (level, tuple(patterns))
            for level, patterns in (entity_patterns or DEFAULT_ENTITY_PATTERNS)
        )
        self._cache: dict[tuple[str, ...], ColumnResolution] = {}

    def resolve_schema(self, columns: Iterable[str]) -> ColumnResolution:
        """
        Resolve every semantic field and the wasted-spend entity column.
        """

        schema = tuple(columns)
        cached = self._cache.get(schema)
        if cached is not None:
            return cached

        fields: dict[SemanticField, str | None] = {
            semantic_field: resolve_column(schema, self._field_patterns.get(semantic_field, ()))
            for semantic_field in SemanticField
        }

        entity_column: str | None = None
        entity_level: EntityLevel | None = None
        for level, patterns in self._entity_patterns:
            entity_column = resolve_column(schema, patterns)
            if entity_column is not None:
                entity_level = level
                break

        resolution = ColumnResolution(
            columns=schema,
            fields=fields,
            entity_column=entity_column,
            entity_level=entity_level,
            unresolved=tuple(item for item, column in fields.items() if column is None),
        )
        self._cache[schema] = resolution
        return resolution
