"""Header canonicalization and case-insensitive column lookup.

A :class:`HeaderIndex` is built once per file from the header line. It maps a
normalized column name (whitespace collapsed, lowercased) to the canonical
header text exactly as it should be displayed. Duplicate headers that
normalize to the same key collapse to the LAST occurrence; callers that need
every column should iterate :attr:`HeaderIndex.headers` instead.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_WS_RE = re.compile(r"\s+")


def strip_enclosing_quote(value: str) -> str:
    """Remove at most one leading and one trailing double quote."""

    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def canonical_header(raw: str) -> str:
    """Trim, unquote once, and collapse internal whitespace runs."""

    return _WS_RE.sub(" ", strip_enclosing_quote(raw.strip()))


def normalize_key(name: str) -> str:
    return _WS_RE.sub(" ", name).strip().lower()


@dataclass(frozen=True, slots=True)
class HeaderIndex:
    """Lookup from normalized column name to canonical header name."""

    headers: tuple[str, ...]
    by_key: dict[str, str]

    @classmethod
    def from_headers(cls, headers: Iterable[str]) -> HeaderIndex:
        ordered = tuple(headers)
        by_key: dict[str, str] = {}
        for header in ordered:
            # Last occurrence wins on duplicate keys.
            by_key[normalize_key(header)] = header
        return cls(headers=ordered, by_key=by_key)

    def has(self, name: str) -> bool:
        return normalize_key(name) in self.by_key

    def resolve(self, name: str, default: str | None = None) -> str | None:
        """Return the canonical header for ``name`` regardless of case/spacing."""

        return self.by_key.get(normalize_key(name), default)

    def first_containing(self, *needles: str) -> str | None:
        """Return the first header (file order) containing any of ``needles``."""

        lowered = [n.lower() for n in needles]
        for header in self.headers:
            key = normalize_key(header)
            if any(n in key for n in lowered):
                return header
        return None

    def __len__(self) -> int:
        return len(self.headers)


__all__ = ["HeaderIndex", "canonical_header", "normalize_key", "strip_enclosing_quote"]
