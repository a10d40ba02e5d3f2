"""
app/domain package marker.
"""

from app.domain.ad_rows import CellValue, EntityLevel, Row, SemanticField

__all__ = [
    "CellValue",
    "EntityLevel",
    "Row",
    "SemanticField",
]
