"""Page range parsing.

Turns a user-entered expression such as ``"1, 3-5, 8"`` or ``"all"`` into
0-based page indices. User input is 1-based; everything returned here is
0-based.

Two modes are offered:

* :func:`parse_individual` flattens every token into one ascending,
  de-duplicated list of indices.
* :func:`parse_groups` keeps one group per comma-separated token, in input
  order. Groups may overlap.

An empty expression selects every page, like ``"all"``. Empty tokens (for
example from a trailing comma) are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from .exceptions import ParseError

PageIndex = int
RangeGroup = List[PageIndex]

ALL_PAGES = "all"

_NUMBER = re.compile(r"[0-9]+")
_INTERVAL = re.compile(r"([0-9]+)\s*-\s*([0-9]+)")


@dataclass(frozen=True)
class RangeToken:
    """One parsed unit of a range expression, stored 0-based and inclusive.

    ``start == end`` for a single page token.
    """

    start: PageIndex
    end: PageIndex
    text: str = ""

    @property
    def is_single(self) -> bool:
        return self.start == self.end

    def pages(self) -> RangeGroup:
        return list(range(self.start, self.end + 1))

    def label(self) -> str:
        """Return a human-readable, 1-based label for the token."""

        if self.is_single:
            return f"page_{self.start + 1}"
        return f"pages_{self.start + 1}-{self.end + 1}"


def _check_bounds(token: str, page: int, page_count: int) -> None:
    if page < 1 or page > page_count:
        raise ParseError(
            f"Page {page} in '{token}' is out of bounds: the document has "
            f"{page_count} page(s)."
        )


def _parse_token(token: str, page_count: int) -> RangeToken:
    if "-" in token:
        match = _INTERVAL.fullmatch(token)
        if not match:
            raise ParseError(
                f"Invalid range format: '{token}'. Expected 'start-end'."
            )
        start = int(match.group(1))
        end = int(match.group(2))
        if start > end:
            raise ParseError(
                f"Invalid range '{token}': start page ({start}) must be <= end page ({end})."
            )
        _check_bounds(token, start, page_count)
        _check_bounds(token, end, page_count)
        return RangeToken(start - 1, end - 1, token)

    if not _NUMBER.fullmatch(token):
        raise ParseError(
            f"Invalid page number: '{token}'. Expected a positive integer."
        )
    page = int(token)
    _check_bounds(token, page, page_count)
    return RangeToken(page - 1, page - 1, token)


def parse_tokens(expr: str | None, page_count: int) -> List[RangeToken]:
    """Parse ``expr`` into validated :class:`RangeToken` values in input order.

    Args:
        expr: Comma-separated range expression. ``None``, an empty string and
            ``"all"`` (case-insensitive, as the whole expression) select every
            page.
        page_count: Number of pages in the source document.

    Raises:
        ParseError: If a token is malformed, reversed or out of bounds, or if
            the expression selects no pages at all.
    """

    text = (expr or "").strip()
    if not text or text.lower() == ALL_PAGES:
        if page_count < 1:
            raise ParseError(
                f"No valid pages found in '{expr or ''}': the document has {page_count} page(s)."
            )
        return [RangeToken(0, page_count - 1, text or ALL_PAGES)]

    tokens = [
        _parse_token(token, page_count)
        for token in (part.strip() for part in text.split(","))
        if token
    ]
    if not tokens:
        raise ParseError(
            f"No valid pages found in '{expr}': the document has {page_count} page(s)."
        )
    return tokens


def parse_individual(expr: str | None, page_count: int) -> List[PageIndex]:
    """Return the selected pages as a sorted list of unique 0-based indices.

    >>> parse_individual("1,3-5,8", 10)
    [0, 2, 3, 4, 7]
    """

    pages: set[PageIndex] = set()
    for token in parse_tokens(expr, page_count):
        pages.update(token.pages())
    return sorted(pages)


def parse_groups(expr: str | None, page_count: int) -> List[RangeGroup]:
    """Return one group of 0-based indices per token, in input order.

    Groups are not de-duplicated against each other.

    >>> parse_groups("1-3,4-6,8", 10)
    [[0, 1, 2], [3, 4, 5], [7]]
    """

    return [token.pages() for token in parse_tokens(expr, page_count)]


def group_label(group: RangeGroup) -> str:
    """Return the filename label of a contiguous group (``page_N``/``pages_S-E``)."""

    if not group:
        raise ParseError("Cannot label an empty page group.")
    return RangeToken(group[0], group[-1]).label()


def build_output_filename(base_name: str, group: RangeGroup) -> str:
    """Construct the output filename for one split group."""

    return f"{base_name}_{group_label(group)}.pdf"


def format_pages(pages: List[PageIndex]) -> str:
    """Render 0-based indices back into a compact 1-based expression."""

    if not pages:
        return ""
    parts: List[str] = []
    start = prev = pages[0]
    for page in list(pages[1:]) + [None]:
        if page is not None and page == prev + 1:
            prev = page
            continue
        parts.append(str(start + 1) if start == prev else f"{start + 1}-{prev + 1}")
        if page is not None:
            start = prev = page
    return ",".join(parts)


__all__ = [
    "ALL_PAGES",
    "PageIndex",
    "RangeGroup",
    "RangeToken",
    "parse_tokens",
    "parse_individual",
    "parse_groups",
    "group_label",
    "build_output_filename",
    "format_pages",
]
