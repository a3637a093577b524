"""
predicates – accumulates classified tokens into a typed PredicateSet.

Each category maps a value to a Polarity; a value that is absent from the
mapping is unconstrained.  The builder rejects the first token that would
put a value under both polarities, exceed a category's required-value
cap, or flip a structural flag that has already been set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Union

from dexsearch.config import (
    MAX_REQUIRED_ABILITIES,
    MAX_REQUIRED_MOVES,
    MAX_REQUIRED_TYPES,
)
from dexsearch.errors import (
    CardinalityExceededError,
    ConflictingPredicateError,
    EmptyQueryError,
)
from dexsearch.tokens import ClassifiedToken, TokenKind

logger = logging.getLogger(__name__)

Value = Union[str, int]


class Polarity(str, Enum):
    REQUIRED = "required"
    EXCLUDED = "excluded"

    @classmethod
    def of(cls, wanted: bool) -> "Polarity":
        return cls.REQUIRED if wanted else cls.EXCLUDED


class Category(str, Enum):
    ABILITY = "ability"
    TIER = "tier"
    COLOR = "color"
    GENERATION = "generation"
    TYPE = "type"
    MOVE = "move"


# Wording used in conflict messages ("cannot both exclude and include a tier")
_CATEGORY_NOUNS = {
    Category.ABILITY: "an ability",
    Category.TIER: "a tier",
    Category.COLOR: "a color",
    Category.GENERATION: "a generation",
    Category.TYPE: "a type",
    Category.MOVE: "a move",
}

# Category → (max required values, error text)
_REQUIRED_CAPS = {
    Category.ABILITY: (MAX_REQUIRED_ABILITIES, "Specify only one ability."),
    Category.TYPE: (MAX_REQUIRED_TYPES, "Specify a maximum of two types."),
    Category.MOVE: (MAX_REQUIRED_MOVES, "Specify a maximum of 4 moves."),
}

_TOKEN_CATEGORIES = {
    TokenKind.ABILITY: Category.ABILITY,
    TokenKind.TIER: Category.TIER,
    TokenKind.COLOR: Category.COLOR,
    TokenKind.GENERATION: Category.GENERATION,
    TokenKind.TYPE: Category.TYPE,
    TokenKind.MOVE: Category.MOVE,
}


@dataclass
class PredicateSet:
    """Everything a query asks for, after validation."""
    categories: Dict[Category, Dict[Value, Polarity]] = field(
        default_factory=lambda: {c: {} for c in Category}
    )
    show_all: bool = False
    mega: Optional[bool] = None
    fully_evolved: Optional[bool] = None

    def values(self, category: Category) -> Dict[Value, Polarity]:
        return self.categories.setdefault(category, {})

    def required(self, category: Category) -> set:
        return {v for v, p in self.values(category).items() if p is Polarity.REQUIRED}

    def excluded(self, category: Category) -> set:
        return {v for v, p in self.values(category).items() if p is Polarity.EXCLUDED}

    def is_active(self, category: Category) -> bool:
        return bool(self.values(category))

    @property
    def has_predicates(self) -> bool:
        return any(self.values(c) for c in Category)

    @property
    def has_structural_filters(self) -> bool:
        return self.mega is not None or self.fully_evolved is not None

    @property
    def is_show_all_only(self) -> bool:
        return self.show_all and not self.has_predicates and not self.has_structural_filters


class PredicateBuilder:
    """Feeds classified tokens into a fresh PredicateSet."""

    def __init__(self) -> None:
        self.predicates = PredicateSet()

    def add(self, token: ClassifiedToken) -> None:
        if token.kind is TokenKind.ALL:
            self.predicates.show_all = True
        elif token.kind is TokenKind.MEGA:
            self.predicates.mega = self._set_flag(
                self.predicates.mega, token.wanted, "Mega Evolutions")
        elif token.kind is TokenKind.FULLY_EVOLVED:
            self.predicates.fully_evolved = self._set_flag(
                self.predicates.fully_evolved, token.wanted, "fully evolved Pokémon")
        else:
            self._add_value(_TOKEN_CATEGORIES[token.kind], token.value, Polarity.of(token.wanted))

    def _set_flag(self, current: Optional[bool], wanted: bool, noun: str) -> bool:
        if current is not None and current != wanted:
            raise ConflictingPredicateError(noun)
        return wanted

    def _add_value(self, category: Category, value: Value, polarity: Polarity) -> None:
        values = self.predicates.values(category)
        existing = values.get(value)
        if existing is not None and existing is not polarity:
            raise ConflictingPredicateError(_CATEGORY_NOUNS[category])
        if existing is polarity:
            return
        if polarity is Polarity.REQUIRED and category in _REQUIRED_CAPS:
            cap, message = _REQUIRED_CAPS[category]
            if len(self.predicates.required(category)) >= cap:
                raise CardinalityExceededError(message)
        values[value] = polarity

    def build(self) -> PredicateSet:
        if self.predicates.is_show_all_only:
            raise EmptyQueryError()
        return self.predicates


def build_predicates(tokens: Iterable[ClassifiedToken]) -> PredicateSet:
    """Run every token through a PredicateBuilder and return the finished set."""
    builder = PredicateBuilder()
    for token in tokens:
        builder.add(token)
    predicates = builder.build()
    logger.debug(
        "Predicates: %s show_all=%s mega=%s fe=%s",
        {c.value: v for c, v in predicates.categories.items() if v},
        predicates.show_all, predicates.mega, predicates.fully_evolved,
    )
    return predicates
