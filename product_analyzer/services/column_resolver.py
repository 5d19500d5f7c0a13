"""
Column resolver for product performance exports

Exports start with a variable number of report-title and date-range rows, and
the header text depends on the account language. The resolver finds the real
header row by probing for the identifier column, then maps every semantic
field to a column index by case-insensitive substring matching.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from product_analyzer.exceptions import EmptyFileError, HeaderNotFoundError, MissingColumnsError
from product_analyzer.utils.logger import log

NOT_FOUND = -1
DEFAULT_HEADER_SEARCH_ROWS = 20

# Field -> header substrings (lowercase), English and Czech exports
COLUMN_SYNONYMS: Dict[str, List[str]] = {
    'id': ['item id', 'id položky', 'id'],
    'brand': ['brand', 'značka'],
    'device': ['device', 'zařízení'],
    'clicks': ['clicks', 'kliknutí', 'prokliky'],
    'impressions': ['impr.', 'zobr.', 'impr', 'zobrazení'],
    'cost': ['cost', 'cena'],
    'conversions': ['conversions', 'konverze'],
    'conversion_value': ['conv. value', 'hodnota konverze', 'hodnota konv.', 'hodnota kov.'],
    'search_impression_share': ['search impr. share', 'podíl zobr. ve vyhledávací síti', 'podíl zobrazení'],
}

REQUIRED_FIELDS = ('cost', 'conversion_value')

FIELD_LABELS = {
    'cost': 'Cost',
    'conversion_value': 'Conv. value',
}


@dataclass(frozen=True)
class ColumnMap:
    """Header row position plus the column index of every field (-1 = absent)"""
    header_row: int
    indices: Dict[str, int] = field(default_factory=dict)

    def index(self, field_name: str) -> int:
        return self.indices.get(field_name, NOT_FOUND)

    def has(self, field_name: str) -> bool:
        return self.index(field_name) != NOT_FOUND


def find_column(headers: Sequence[str], synonyms: Sequence[str]) -> int:
    """Index of the first header containing any synonym, -1 if none does."""
    for idx, header in enumerate(headers):
        lowered = header.lower()
        if any(s in lowered for s in synonyms):
            return idx
    return NOT_FOUND


def find_header_row(
    rows: Sequence[Sequence[str]],
    id_synonyms: Sequence[str],
    max_rows: int = DEFAULT_HEADER_SEARCH_ROWS,
) -> Optional[Tuple[int, int]]:
    """
    Locate the header row within the first max_rows rows.

    Returns (row_index, id_column_index), or None when no probed row
    contains the identifier column.
    """
    for row_idx in range(min(len(rows), max_rows)):
        id_idx = find_column(rows[row_idx], id_synonyms)
        if id_idx != NOT_FOUND:
            return row_idx, id_idx
    return None


def resolve_columns(
    rows: Sequence[Sequence[str]],
    synonyms: Optional[Dict[str, List[str]]] = None,
    max_rows: int = DEFAULT_HEADER_SEARCH_ROWS,
) -> ColumnMap:
    """
    Find the header row and map each field to its column.

    Raises:
        EmptyFileError: fewer than two rows were parsed
        HeaderNotFoundError: no identifier column within the probed rows
        MissingColumnsError: cost or conversion value column is missing
    """
    synonyms = synonyms or COLUMN_SYNONYMS

    if len(rows) < 2:
        raise EmptyFileError()

    located = find_header_row(rows, synonyms['id'], max_rows)
    if located is None:
        log.warning(f"No identifier column in the first {min(len(rows), max_rows)} rows")
        raise HeaderNotFoundError()

    header_row, id_idx = located
    headers = rows[header_row]

    indices = {'id': id_idx}
    for field_name, field_synonyms in synonyms.items():
        if field_name == 'id':
            continue
        indices[field_name] = find_column(headers, field_synonyms)

    missing = [f for f in REQUIRED_FIELDS if indices.get(f, NOT_FOUND) == NOT_FOUND]
    if missing:
        log.warning(f"Header row {header_row} lacks required columns: {missing}")
        raise MissingColumnsError(FIELD_LABELS[f] for f in missing)

    log.debug(f"Resolved header row {header_row}: {indices}")
    return ColumnMap(header_row=header_row, indices=indices)
