"""
tokens – splits a raw dexsearch query and classifies each piece.

Classification tries an ordered list of matchers; the first one that
recognises a token wins.  The order matters (an ability name shadows a
move of the same name, a tier shadows a color, and so on) and is fixed:

    ability → tier → color → generation → all → mega → fe/nfe → move → "<type> type"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from dexsearch.catalog import Catalog
from dexsearch.config import (
    ALL_KEYWORD,
    COLORS,
    FE_KEYWORDS,
    GENERATION_RANGE,
    MEGA_KEYWORDS,
    NFE_KEYWORDS,
    TIERS,
    TYPE_SUFFIX,
)
from dexsearch.errors import UnclassifiableTokenError

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    ABILITY = "ability"
    TIER = "tier"
    COLOR = "color"
    GENERATION = "generation"
    ALL = "all"
    MEGA = "mega"
    FULLY_EVOLVED = "fully_evolved"
    MOVE = "move"
    TYPE = "type"


@dataclass(frozen=True)
class ClassifiedToken:
    kind: TokenKind
    value: Union[str, int, bool]
    negated: bool = False

    @property
    def wanted(self) -> bool:
        """True when the token asks for presence, False for absence."""
        return not self.negated


def split_query(query: str) -> List[Tuple[str, bool]]:
    """
    Split *query* on commas into (text, negated) pairs.

    Empty pieces are kept as "" so classification rejects them.
    """
    pieces = []
    for raw in query.split(","):
        text = raw.strip().lower()
        negated = text.startswith("!")
        if negated:
            text = text[1:].strip()
        pieces.append((text, negated))
    return pieces


# ── Matchers ────────────────────────────────────────────────────────────────
# Each takes (catalog, text, negated) and returns a token or None.

Matcher = Callable[[Catalog, str, bool], Optional[ClassifiedToken]]


def _match_ability(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    ability = catalog.lookup_ability(text)
    if ability is None:
        return None
    return ClassifiedToken(TokenKind.ABILITY, ability.name, negated)


def _match_tier(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text in TIERS:
        return ClassifiedToken(TokenKind.TIER, text, negated)
    return None


def _match_color(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text in COLORS:
        return ClassifiedToken(TokenKind.COLOR, text, negated)
    return None


def _match_generation(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text.isdigit() and int(text) in GENERATION_RANGE:
        return ClassifiedToken(TokenKind.GENERATION, int(text), negated)
    return None


def _match_all(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text == ALL_KEYWORD:
        return ClassifiedToken(TokenKind.ALL, True, negated)
    return None


def _match_mega(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text in MEGA_KEYWORDS:
        return ClassifiedToken(TokenKind.MEGA, not negated, negated)
    return None


def _match_fully_evolved(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if text in FE_KEYWORDS:
        return ClassifiedToken(TokenKind.FULLY_EVOLVED, not negated, negated)
    if text in NFE_KEYWORDS:
        # "nfe" is "!fe"; "!nfe" is "fe"
        return ClassifiedToken(TokenKind.FULLY_EVOLVED, negated, not negated)
    return None


def _match_move(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    move = catalog.lookup_move(text)
    if move is None:
        return None
    return ClassifiedToken(TokenKind.MOVE, move.name, negated)


def _match_type(catalog: Catalog, text: str, negated: bool) -> Optional[ClassifiedToken]:
    if not text.endswith(TYPE_SUFFIX):
        return None
    word = text[: -len(TYPE_SUFFIX)].strip()
    if not word or " " in word:
        return None
    type_name = catalog.type_name(word.capitalize())
    if type_name is None:
        return None
    return ClassifiedToken(TokenKind.TYPE, type_name, negated)


MATCHERS: Tuple[Matcher, ...] = (
    _match_ability,
    _match_tier,
    _match_color,
    _match_generation,
    _match_all,
    _match_mega,
    _match_fully_evolved,
    _match_move,
    _match_type,
)


def classify_token(catalog: Catalog, text: str, negated: bool = False) -> ClassifiedToken:
    """Classify one already-normalised token; raise if nothing recognises it."""
    if not text:
        raise UnclassifiableTokenError(text)
    for matcher in MATCHERS:
        token = matcher(catalog, text, negated)
        if token is not None:
            return token
    raise UnclassifiableTokenError(text)


def classify_query(catalog: Catalog, query: str) -> List[ClassifiedToken]:
    """Split and classify every token of *query*, stopping at the first unknown one."""
    tokens = [classify_token(catalog, text, negated) for text, negated in split_query(query)]
    logger.debug("Classified %d tokens from %r", len(tokens), query)
    return tokens
