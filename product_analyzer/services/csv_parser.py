"""
Tabular parser for ad platform exports

Splits raw export text into rows of string cells. Quoted cells may contain
commas and doubled quotes (""), but the quote state resets on every line:
a quoted cell spanning several lines is not supported and will be split.
"""
import re
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


def parse_line(line: str) -> List[str]:
    """Split one line into cells, honoring double-quoted cells."""
    cells = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                # Escaped quote
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    cells.append("".join(current))
    return cells


def parse_csv(text: str) -> List[List[str]]:
    """
    Parse export text into rows.

    Lines are trimmed and blank lines are dropped entirely, so row indexes
    refer to non-empty lines only.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    rows = []
    for raw_line in _LINE_BREAK.split(text):
        line = raw_line.strip()
        if not line:
            continue
        rows.append(parse_line(line))
    return rows
