"""Lexical splitting of a single CSV line into raw field values.

The tokenizer knows nothing about headers or schemas. A double quote toggles
quoted mode and is never emitted; a comma outside quoted mode ends the
current field. Doubled quotes inside a quoted field (``""``) are NOT treated
as an escaped literal quote: each one is just another toggle, so
``"She said ""hi""\"`` yields ``She said hi``. Statement exports seen in
practice do not rely on that escape.
"""

from __future__ import annotations

DELIMITER = ","
QUOTE = '"'


def split_line(line: str) -> list[str]:
    """Split ``line`` into its ordered field values.

    Always returns at least one field; an empty line yields ``[""]`` and a
    trailing delimiter yields a trailing empty field.
    """

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for ch in line:
        if ch == QUOTE:
            in_quotes = not in_quotes
        elif ch == DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    fields.append("".join(current))
    return fields


__all__ = ["split_line"]
