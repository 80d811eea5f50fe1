"""Normalize raw position tokens into canonical position codes."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

CanonicalPosition = Literal[
    "GK",
    "RB", "RWB", "CB", "LB", "LWB",
    "CDM", "CM", "CAM",
    "RM", "LM",
    "RW", "LW",
    "RF", "LF", "CF", "ST",
]

POSITION_CODES: Tuple[str, ...] = (
    "GK",
    "RB", "RWB", "CB", "LB", "LWB",
    "CDM", "CM", "CAM",
    "RM", "LM",
    "RW", "LW",
    "RF", "LF", "CF", "ST",
)

_POSITION_SET = frozenset(POSITION_CODES)

# A raw token as delivered by data sources: free text, a numeric game id,
# a nested payload carrying one of those, or a list of any of them.
RawPosition = Union[str, int, Mapping[str, Any], Sequence[Any], None]

_ALIAS_GROUPS: Dict[str, List[str]] = {
    "GK": ["GOALKEEPER", "KEEPER", "GOALIE"],
    "RB": ["RIGHT BACK", "RIGHT FULLBACK", "RIGHT FULL BACK"],
    "LB": ["LEFT BACK", "LEFT FULLBACK", "LEFT FULL BACK"],
    "RWB": ["RIGHT WING BACK", "RIGHT WINGBACK"],
    "LWB": ["LEFT WING BACK", "LEFT WINGBACK"],
    "CB": ["CENTER BACK", "CENTRE BACK", "CENTRAL DEFENDER", "SW", "SWEEPER", "LCB", "RCB"],
    "CDM": ["DEFENSIVE MID", "DEFENSIVE MIDFIELDER", "HOLDING MIDFIELDER", "DM", "LDM", "RDM"],
    "CM": ["CENTRE MID", "CENTER MID", "CENTRAL MIDFIELDER", "CENTRAL MID", "LCM", "RCM"],
    "CAM": ["ATTACKING MID", "ATTACKING MIDFIELDER", "AM", "LAM", "RAM"],
    "RM": ["RIGHT MID", "RIGHT MIDFIELDER"],
    "LM": ["LEFT MID", "LEFT MIDFIELDER"],
    "RW": ["RIGHT WING", "RIGHT WINGER"],
    "LW": ["LEFT WING", "LEFT WINGER"],
    "RF": ["RIGHT FORWARD"],
    "LF": ["LEFT FORWARD"],
    "CF": ["CENTRE FORWARD", "CENTER FORWARD"],
    "ST": ["STRIKER", "FORWARD", "LS", "RS"],
}


def _build_alias_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for code, variants in _ALIAS_GROUPS.items():
        for variant in (code, *variants):
            lookup.setdefault(variant, code)
            lookup.setdefault(variant.replace(" ", ""), code)
    return lookup


ALIASES: Mapping[str, str] = _build_alias_lookup()

# Numeric position ids used by the card game's own data feeds.
NUMERIC_CODES: Mapping[int, str] = {
    0: "GK",
    1: "CB",
    2: "RWB",
    3: "RB",
    4: "CB",
    5: "CB",
    6: "CB",
    7: "LB",
    8: "LWB",
    9: "CDM",
    10: "CDM",
    11: "CDM",
    12: "RM",
    13: "CM",
    14: "CM",
    15: "CM",
    16: "LM",
    17: "CAM",
    18: "CAM",
    19: "CAM",
    20: "RF",
    21: "CF",
    22: "LF",
    23: "RW",
    24: "ST",
    25: "ST",
    26: "ST",
    27: "LW",
}

POSITION_FIELDS: Tuple[str, ...] = ("position", "pos", "code", "short_name", "name")
# Payloads nested deeper than this (or cyclic ones) resolve to None.
MAX_NESTING = 4

_HARD_DELIMITERS = re.compile(r"[,;/|]+")
_WHITESPACE = re.compile(r"\s+")
_NON_LETTERS = re.compile(r"[^A-Z]")


def _lookup(token: str) -> Optional[str]:
    if token in _POSITION_SET:
        return token
    return ALIASES.get(token)


def _from_text(raw: str) -> Optional[str]:
    cleaned = _WHITESPACE.sub(" ", raw.strip().upper())
    if not cleaned:
        return None
    if cleaned in _POSITION_SET:
        return cleaned

    resolved = ALIASES.get(cleaned) or ALIASES.get(cleaned.replace(" ", ""))
    if resolved:
        return resolved

    letters = _NON_LETTERS.sub("", cleaned)
    if not letters:
        return None
    return _lookup(letters)


def _from_code(raw: int) -> Optional[str]:
    return NUMERIC_CODES.get(raw)


def _from_mapping(raw: Mapping[str, Any], depth: int) -> Optional[str]:
    if depth >= MAX_NESTING:
        return None
    for field in POSITION_FIELDS:
        value = raw.get(field)
        if value is None or value == "":
            continue
        return _normalize(value, depth + 1)
    return None


def normalize_position(raw: Any) -> Optional[str]:
    """Return the canonical code for a single raw token, or ``None``."""

    return _normalize(raw, 0)


def _normalize(raw: Any, depth: int) -> Optional[str]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        return _from_text(raw)
    if isinstance(raw, int):
        return _from_code(raw)
    if isinstance(raw, Mapping):
        return _from_mapping(raw, depth)
    return None


def normalize_positions(raw: RawPosition) -> List[str]:
    """Normalize one token or a sequence of tokens.

    The result is deduplicated and keeps first-seen order. Unresolved tokens are
    dropped, so normalizing an already canonical list returns it unchanged.
    """

    if raw is None:
        return []
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        tokens: Iterable[Any] = [raw]
    else:
        tokens = raw

    seen: set[str] = set()
    result: List[str] = []
    for token in tokens:
        code = normalize_position(token)
        if code and code not in seen:
            seen.add(code)
            result.append(code)
    return result


def split_position_text(text: Optional[str]) -> List[str]:
    """Split a delimited alternate-position string into raw tokens.

    Commas, semicolons, slashes and pipes always separate tokens. A chunk that
    does not resolve as a whole is split into the longest runs of words that do,
    so ``"Right Back, ST"`` keeps ``"Right Back"`` intact and
    ``"Right Wing Left Wing"`` yields ``"Right Wing"`` and ``"Left Wing"``.
    """

    if not text:
        return []
    tokens: List[str] = []
    for chunk in _HARD_DELIMITERS.split(text):
        chunk = chunk.strip()
        if not chunk:
            continue
        if normalize_position(chunk) is not None:
            tokens.append(chunk)
            continue
        tokens.extend(_split_words(chunk))
    return tokens


def _split_words(chunk: str) -> List[str]:
    words = [word for word in _WHITESPACE.split(chunk) if word]
    tokens: List[str] = []
    start = 0
    while start < len(words):
        for end in range(len(words), start, -1):
            candidate = " ".join(words[start:end])
            if normalize_position(candidate) is not None:
                tokens.append(candidate)
                start = end
                break
        else:
            tokens.append(words[start])
            start += 1
    return tokens


def player_positions(
    primary: RawPosition = None,
    alternates: RawPosition = None,
    *,
    explicit: Optional[Sequence[Any]] = None,
) -> List[str]:
    """Resolve a card's native positions from its position fields.

    A non-empty explicit list wins; otherwise the primary position is followed by
    the alternates, which may be a delimited string or a pre-split list.
    """

    if explicit:
        return normalize_positions(list(explicit))

    raw: List[Any] = []
    if primary is not None and primary != "":
        if isinstance(primary, Sequence) and not isinstance(primary, str):
            raw.extend(primary)
        else:
            raw.append(primary)
    if isinstance(alternates, str):
        raw.extend(split_position_text(alternates))
    elif isinstance(alternates, Sequence):
        for item in alternates:
            if isinstance(item, str):
                raw.extend(split_position_text(item))
            else:
                raw.append(item)
    elif alternates is not None:
        raw.append(alternates)
    return normalize_positions(raw)


__all__ = [
    "ALIASES",
    "CanonicalPosition",
    "NUMERIC_CODES",
    "POSITION_CODES",
    "RawPosition",
    "normalize_position",
    "normalize_positions",
    "player_positions",
    "split_position_text",
]
