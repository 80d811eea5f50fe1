"""Environment overrides for classification and defaults."""

from __future__ import annotations

import logging
import os
from typing import FrozenSet, Iterable

from .formations import DEFAULT_FORMATION, get_formation


logger = logging.getLogger(__name__)

ICON_CLUBS_ENV = "SQUADCHEM_ICON_CLUBS"
ICON_LEAGUES_ENV = "SQUADCHEM_ICON_LEAGUES"
HERO_CLUBS_ENV = "SQUADCHEM_HERO_CLUBS"
DEFAULT_FORMATION_ENV = "SQUADCHEM_DEFAULT_FORMATION"

_ICON_CLUBS_DEFAULT = ("ICON",)
_ICON_LEAGUES_DEFAULT = ("ICONS",)
_HERO_CLUBS_DEFAULT = ("HERO",)


def _env_tokens(name: str, default: Iterable[str]) -> FrozenSet[str]:
    raw = os.getenv(name)
    if raw is None:
        return frozenset(default)
    tokens = frozenset(part.strip().upper() for part in raw.split(",") if part.strip())
    if not tokens:
        logger.warning("Empty token list for %s; using defaults %s", name, ", ".join(default))
        return frozenset(default)
    return tokens


def icon_club_tokens() -> FrozenSet[str]:
    return _env_tokens(ICON_CLUBS_ENV, _ICON_CLUBS_DEFAULT)


def icon_league_tokens() -> FrozenSet[str]:
    return _env_tokens(ICON_LEAGUES_ENV, _ICON_LEAGUES_DEFAULT)


def hero_club_tokens() -> FrozenSet[str]:
    return _env_tokens(HERO_CLUBS_ENV, _HERO_CLUBS_DEFAULT)


def default_formation_name() -> str:
    raw = os.getenv(DEFAULT_FORMATION_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_FORMATION
    try:
        return get_formation(raw).name
    except KeyError:
        logger.warning("Unknown formation for %s: %s; using default %s", DEFAULT_FORMATION_ENV, raw, DEFAULT_FORMATION)
        return DEFAULT_FORMATION
