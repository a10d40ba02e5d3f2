"""
app/mappers package marker.
"""

from app.mappers.column_resolver import (
    DEFAULT_ENTITY_PATTERNS,
    DEFAULT_FIELD_PATTERNS,
    ColumnResolution,
    ColumnResolver,
    resolve_column,
)

__all__ = [
    "DEFAULT_ENTITY_PATTERNS",
    "DEFAULT_FIELD_PATTERNS",
    "ColumnResolution",
    "ColumnResolver",
    "resolve_column",
]
