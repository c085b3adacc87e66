# token_reader.py
"""
Low-level reader for ARGO text.

An ARGO file starts with a line holding the number C of comment lines,
followed by C free-text comment lines. Everything after that is an
undelimited stream of numbers separated by spaces/tabs, with line breaks
carrying no meaning.

    2
    Bridge 14, span 23.6 m
    designer: ...
    1 25 3 3 2 1 ...

`split_argo_text` returns (comments, tokens); `TokenStream` is the cursor
the decoder consumes. The cursor only moves forward, except for a single
explicit `push_back` used by the detailed-reinforcement pass when a group
count turns out to be the zero sentinel.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple, Union

from config import ARGO_ENCODING
from src.utilities.errors import FormatError, UnexpectedEndOfStream

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")
_TOKEN_SPLIT = re.compile(r"[ \t]+")


def read_argo_file(path: Union[str, Path]) -> str:
    """Decode an ARGO file with the legacy single-byte code page."""
    return Path(path).read_bytes().decode(ARGO_ENCODING)


def split_argo_text(text: str) -> Tuple[List[str], List[str]]:
    """
    Split raw ARGO text into (comment lines, tokens).

    Raises
    ------
    FormatError
        If the first line is not a non-negative integer, or if it declares
        more comment lines than the file holds.
    """
    lines = _LINE_SPLIT.split(text)
    head = lines[0].strip() if lines else ""
    if not head.isdigit():
        raise FormatError(f"First line must be the comment line count, got {head!r}")

    comment_count = int(head)
    if comment_count > len(lines) - 1:
        raise FormatError(
            f"Header declares {comment_count} comment lines but only {len(lines) - 1} lines follow"
        )

    comments = lines[1:comment_count + 1]
    tokens: List[str] = []
    for ln in lines[comment_count + 1:]:
        tokens.extend(t for t in _TOKEN_SPLIT.split(ln) if t)
    return comments, tokens


class TokenStream:
    """Forward-only cursor over ARGO tokens with one-token push-back."""

    def __init__(self, tokens: List[str]):
        self._tokens = list(tokens)
        self._pos = 0
        self._can_push_back = False

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def position(self) -> int:
        return self._pos

    def has_more(self) -> bool:
        return self._pos < len(self._tokens)

    def peek(self) -> str:
        if not self.has_more():
            raise UnexpectedEndOfStream(self._pos)
        return self._tokens[self._pos]

    def advance(self, what: str = "token") -> str:
        if not self.has_more():
            raise UnexpectedEndOfStream(self._pos, what)
        token = self._tokens[self._pos]
        self._pos += 1
        self._can_push_back = True
        return token

    def push_back(self) -> None:
        """Un-read the token returned by the last `advance` (depth is at most 1)."""
        if not self._can_push_back:
            raise RuntimeError("push_back is only allowed once, right after a read")
        self._pos -= 1
        self._can_push_back = False

    def read_float(self, what: str = "number") -> float:
        token = self.advance(what)
        try:
            return float(token)
        except ValueError:
            raise FormatError(f"Token {self._pos - 1} ({what}) is not a number: {token!r}") from None

    def read_int(self, what: str = "integer") -> int:
        # Legacy writers emit counts like "3.00"
        token = self.advance(what)
        try:
            if "." in token:
                return int(round(float(token)))
            return int(token)
        except (ValueError, OverflowError):
            raise FormatError(f"Token {self._pos - 1} ({what}) is not an integer: {token!r}") from None
