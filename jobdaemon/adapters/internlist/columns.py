"""
Header-based column mapping shared by the grid scraper and the CSV export parser.
Both expose the same Airtable view, whose column names drift over time, so
fields are resolved by name against a table of known variants.
"""

import re
from typing import Dict, Iterable, Optional

FIELD_ALIASES = {
    "title": ("position title", "job title", "title", "role", "position"),
    "company": ("company", "company name", "employer"),
    "location": ("location", "locations", "city"),
    "date": ("date", "date posted", "posted", "posted on", "posting date"),
    "salary": ("salary", "pay", "compensation", "hourly rate"),
    "work_model": ("work model", "remote", "work type", "workplace type", "remote onsite"),
    "link": ("apply", "apply link", "application link", "link", "url", "job link"),
}

PLACEHOLDERS = {"", "n/a", "na", "-", "—", "unknown", "none", "null"}


def normalize_header(header: str) -> str:
    header = header.replace("\ufeff", "").lower()
    return " ".join(re.sub(r"[^a-z0-9]+", " ", header).split())


def resolve_columns(headers: Iterable[str]) -> Dict[str, str]:
    """
    Map each known field to the first header matching one of its variants.
    Returns ``{field: original_header}``; unmatched fields are absent.
    """
    by_normalized: Dict[str, str] = {}
    for header in headers:
        by_normalized.setdefault(normalize_header(header), header)

    resolved: Dict[str, str] = {}
    for field_name, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            if alias in by_normalized:
                resolved[field_name] = by_normalized[alias]
                break
    return resolved


def pick(values: Dict[str, str], columns: Dict[str, str], field_name: str) -> Optional[str]:
    header = columns.get(field_name)
    if header is None:
        return None
    value = values.get(header)
    return value.strip() if value else None


def is_placeholder(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in PLACEHOLDERS
