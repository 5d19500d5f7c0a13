"""
Tabular parser tests.

Guards against:
1. Commas inside quoted cells being treated as separators
2. Escaped quotes ("") being dropped or doubled
3. Blank lines showing up as empty rows
4. CRLF exports leaving stray carriage returns in the last cell
"""
from product_analyzer.services.csv_parser import parse_csv, parse_line


def test_quoted_comma_and_escaped_quote():
    assert parse_line('id,"a,b","c""d"') == ["id", "a,b", 'c"d']


def test_plain_cells():
    assert parse_line("SKU-1,Acme,Mobile") == ["SKU-1", "Acme", "Mobile"]


def test_empty_cells_are_kept():
    assert parse_line("a,,c,") == ["a", "", "c", ""]


def test_european_number_in_quotes():
    assert parse_line('SKU-1,"1.234,56"') == ["SKU-1", "1.234,56"]


def test_blank_lines_are_dropped():
    text = "a,b\n\n   \nc,d\n"
    assert parse_csv(text) == [["a", "b"], ["c", "d"]]


def test_crlf_line_endings():
    text = "Item ID,Cost\r\nSKU-1,10\r\n"
    assert parse_csv(text) == [["Item ID", "Cost"], ["SKU-1", "10"]]


def test_lines_are_trimmed():
    assert parse_csv("  a,b  \n") == [["a", "b"]]


def test_byte_order_mark_is_removed():
    rows = parse_csv("\ufeffItem ID,Cost\nSKU-1,10")
    assert rows[0][0] == "Item ID"


def test_quote_state_resets_per_line():
    """An unterminated quote does not swallow the following line."""
    rows = parse_csv('a,"unterminated\nb,c')
    assert rows == [["a", "unterminated"], ["b", "c"]]


def test_empty_text():
    assert parse_csv("") == []
