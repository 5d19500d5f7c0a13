"""
Column resolver tests.

Guards against:
1. Header detection failing when the export starts with report-title rows
2. Localized (Czech) headers not being recognised
3. Optional columns breaking resolution when absent
4. Abort-class errors for empty files, missing identifier and missing cost/value
"""
import pytest

from product_analyzer.exceptions import (
    AnalysisError,
    EmptyFileError,
    HeaderNotFoundError,
    MissingColumnsError,
)
from product_analyzer.services.column_resolver import (
    COLUMN_SYNONYMS,
    NOT_FOUND,
    find_column,
    find_header_row,
    resolve_columns,
)

ENGLISH_HEADER = [
    "Item ID", "Brand", "Device", "Clicks", "Currency code", "Avg. CPC", "Impr.",
    "Cost", "Conversions", "Conv. value", "Conv. value / cost", "Search impr. share",
]

CZECH_HEADER = [
    "ID položky", "Značka", "Zařízení", "Prokliky", "Kód měny", "Prům. CPC", "Zobr.",
    "Cena", "Konverze", "Hodnota konverze", "Hodnota konv./cena", "Podíl zobr. ve vyhledávací síti",
]

DATA_ROW = ["SKU-1", "Acme", "Mobile", "10", "CZK", "1", "100", "10", "1", "30", "3", "20"]


# ---------------------------------------------------------------------------
# find_column
# ---------------------------------------------------------------------------

def test_find_column_is_case_insensitive_substring():
    assert find_column(["Campaign", "ITEM ID (product)"], ["item id"]) == 1


def test_find_column_first_match_wins():
    assert find_column(["Cost", "Conv. value / cost"], COLUMN_SYNONYMS['cost']) == 0


def test_find_column_not_found():
    assert find_column(["Campaign", "Clicks"], COLUMN_SYNONYMS['brand']) == NOT_FOUND


# ---------------------------------------------------------------------------
# Header row detection
# ---------------------------------------------------------------------------

def test_english_header_indices():
    columns = resolve_columns([ENGLISH_HEADER, DATA_ROW])
    assert columns.header_row == 0
    assert columns.index('id') == 0
    assert columns.index('brand') == 1
    assert columns.index('device') == 2
    assert columns.index('clicks') == 3
    assert columns.index('impressions') == 6
    assert columns.index('cost') == 7
    assert columns.index('conversions') == 8
    assert columns.index('conversion_value') == 9
    assert columns.index('search_impression_share') == 11


def test_czech_header_indices():
    columns = resolve_columns([CZECH_HEADER, DATA_ROW])
    assert columns.index('id') == 0
    assert columns.index('brand') == 1
    assert columns.index('device') == 2
    assert columns.index('clicks') == 3
    assert columns.index('impressions') == 6
    assert columns.index('cost') == 7
    assert columns.index('conversions') == 8
    assert columns.index('conversion_value') == 9
    assert columns.index('search_impression_share') == 11


def test_header_after_metadata_rows():
    rows = [
        ["Shopping product report"],
        ["1 September 2025 - 30 September 2025"],
        ["Account: Example shop"],
        ENGLISH_HEADER,
        DATA_ROW,
    ]
    columns = resolve_columns(rows)
    assert columns.header_row == 3
    assert columns.index('cost') == 7


def test_header_search_window_is_limited():
    filler = [["Report"]] * 20
    assert find_header_row(filler + [ENGLISH_HEADER], COLUMN_SYNONYMS['id']) is None
    assert find_header_row(filler[:19] + [ENGLISH_HEADER], COLUMN_SYNONYMS['id']) == (19, 0)


def test_custom_search_window():
    rows = [["Report"]] * 5 + [ENGLISH_HEADER, DATA_ROW]
    with pytest.raises(HeaderNotFoundError):
        resolve_columns(rows, max_rows=5)
    assert resolve_columns(rows, max_rows=6).header_row == 5


def test_optional_columns_absent():
    columns = resolve_columns([["Item ID", "Cost", "Conv. value"], ["SKU-1", "10", "20"]])
    assert columns.index('brand') == NOT_FOUND
    assert columns.index('device') == NOT_FOUND
    assert columns.index('clicks') == NOT_FOUND
    assert columns.index('search_impression_share') == NOT_FOUND
    assert not columns.has('impressions')
    assert columns.has('cost')


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_fewer_than_two_rows():
    with pytest.raises(EmptyFileError):
        resolve_columns([ENGLISH_HEADER])
    with pytest.raises(EmptyFileError):
        resolve_columns([])


def test_identifier_column_missing():
    with pytest.raises(HeaderNotFoundError):
        resolve_columns([["Brand", "Cost", "Conv. value"], ["Acme", "1", "2"]])


def test_cost_column_missing():
    with pytest.raises(MissingColumnsError) as exc_info:
        resolve_columns([["Item ID", "Conv. value"], ["SKU-1", "20"]])
    assert "Cost" in str(exc_info.value)


def test_value_column_missing():
    with pytest.raises(MissingColumnsError) as exc_info:
        resolve_columns([["Item ID", "Cost"], ["SKU-1", "20"]])
    assert exc_info.value.missing == ["Conv. value"]


def test_failures_share_one_error_type():
    for exc_type in (EmptyFileError, HeaderNotFoundError, MissingColumnsError):
        assert issubclass(exc_type, AnalysisError)
