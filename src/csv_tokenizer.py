"""
CSV tokenizer for the published sheet export.

Splits raw CSV text into rows of string cells in a single pass, honouring
quoted fields, doubled-quote escapes and CR, LF or CRLF line endings.
Cells are returned exactly as written; trimming happens during normalization.
"""

from typing import List


def parse_csv(text: str) -> List[List[str]]:
    """
    Tokenize CSV text into rows of cells.

    Blank lines are skipped and a final row without a trailing newline is
    still emitted. Empty input yields no rows.

    Args:
        text: Raw CSV text

    Returns:
        List[List[str]]: Rows of raw cell values
    """
    rows: List[List[str]] = []
    current: List[str] = []
    value: List[str] = []
    inside_quotes = False

    i = 0
    length = len(text)
    while i < length:
        c = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if c == '"' and inside_quotes and nxt == '"':
            value.append('"')
            i += 1
        elif c == '"':
            inside_quotes = not inside_quotes
        elif c == "," and not inside_quotes:
            current.append("".join(value))
            value = []
        elif c in "\r\n" and not inside_quotes:
            if value or current:
                current.append("".join(value))
                rows.append(current)
                current = []
                value = []
            if c == "\r" and nxt == "\n":
                i += 1
        else:
            value.append(c)
        i += 1

    if value or current:
        current.append("".join(value))
        rows.append(current)

    return rows
