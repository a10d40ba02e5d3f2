"""
app/normalization package marker.
"""

from app.normalization.dates import parse_report_date
from app.normalization.numeric import parse_number

__all__ = [
    "parse_number",
    "parse_report_date",
]
