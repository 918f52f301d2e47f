"""Conversion of free-form migration names into CamelCase and snake_case."""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Iterator


class _State(Enum):
    IDLE = 0
    FIRST_ALNUM = 1
    ALNUM = 2
    DELIMITER = 3


def _is_alnum(ch: str) -> bool:
    return unicodedata.category(ch)[0] in ("L", "N")


def _advance(state: _State, ch: str) -> _State:
    alnum = _is_alnum(ch)
    if state is _State.IDLE:
        return _State.FIRST_ALNUM if alnum else _State.IDLE
    if state is _State.FIRST_ALNUM:
        return _State.ALNUM if alnum else _State.DELIMITER
    if state is _State.ALNUM:
        return _State.ALNUM if alnum else _State.DELIMITER
    return _State.FIRST_ALNUM if alnum else _State.IDLE


def _states(text: str) -> Iterator[tuple[_State, str]]:
    state = _State.IDLE
    for ch in text:
        state = _advance(state, ch)
        yield state, ch


def camel_case(text: str) -> str:
    """Return ``text`` as CamelCase, dropping every non-alphanumeric character."""
    parts = []
    for state, ch in _states(text):
        if state is _State.FIRST_ALNUM:
            parts.append(ch.upper())
        elif state is _State.ALNUM:
            parts.append(ch.lower())
    return "".join(parts)


def snake_case(text: str) -> str:
    """Return ``text`` as lower-case words joined by single underscores."""
    parts = []
    state = _State.IDLE
    for state, ch in _states(text):
        if state in (_State.FIRST_ALNUM, _State.ALNUM):
            parts.append(ch.lower())
        elif state is _State.DELIMITER:
            parts.append("_")
    result = "".join(parts)
    if state is _State.IDLE and result.endswith("_"):
        return result[:-1]
    return result