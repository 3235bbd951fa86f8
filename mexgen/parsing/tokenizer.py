"""CSV tokenizer for plant exports.

Exports arrive from spreadsheets with either ``,`` or ``;`` as the delimiter,
quoted fields that may contain the delimiter or line breaks, and doubled
quotes as escapes. The delimiter is chosen from the header record.
"""

from __future__ import annotations

BOM = "\ufeff"
QUOTE = '"'


def _normalise_newlines(content: str) -> str:
    if content.startswith(BOM):
        content = content[1:]
    return content.replace("\r\n", "\n").replace("\r", "\n")


def split_records(content: str) -> list[str]:
    """Split text into raw records, keeping newlines that sit inside quotes."""
    text = _normalise_newlines(content)
    records: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and text[i + 1] == QUOTE:
                # Escaped quote; kept doubled for the field splitter.
                current.append(QUOTE * 2)
                i += 2
                continue
            in_quotes = not in_quotes
            current.append(char)
        elif char == "\n" and not in_quotes:
            records.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    if current:
        records.append("".join(current))
    return [record for record in records if record.strip()]


def detect_delimiter(header: str) -> str:
    return ";" if header.count(";") > header.count(",") else ","


def split_fields(record: str, delimiter: str) -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(record)

    while i < length:
        char = record[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and record[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def tokenize(content: str) -> list[list[str]]:
    """Tokenize CSV text into records of trimmed fields, header included."""
    records = split_records(content)
    if not records:
        return []
    delimiter = detect_delimiter(records[0])
    return [split_fields(record, delimiter) for record in records]
