"""
commands – chat-style front door for the dexsearch engine.

A line such as ``/dexsearch fire type, !uber`` (private reply) or
``!ds mega, fire type`` (broadcast to the room) is dispatched here, and
whatever happens the caller gets back a plain reply string.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from dexsearch.catalog import Catalog
from dexsearch.errors import DexSearchError, UnknownCommandError
from dexsearch.search import dex_search

logger = logging.getLogger(__name__)

COMMAND_ALIASES = {"dexsearch": "dexsearch", "dsearch": "dexsearch", "ds": "dexsearch"}

HELP_LINES = (
    "/dexsearch [type], [move], [move], ... - Searches for Pokemon that fulfill the selected criteria.",
    "Search categories are: type, tier, color, moves, ability, gen.",
    "Valid colors are: green, red, blue, white, brown, yellow, purple, pink, gray and black.",
    "Valid tiers are: Uber/OU/BL/UU/BL2/RU/BL3/NU/LC/CAP.",
    "Types must be followed by ' type', e.g., 'dragon type'.",
    "Parameters can be excluded through the use of '!', e.g., '!water type' excludes all water types.",
    "The parameter 'mega' can be added to search for Mega Evolutions only, and the parameters "
    "'FE' or 'NFE' can be added to search fully or not-fully evolved Pokemon only.",
    "The order of the parameters does not matter.",
)
HELP_TEXT = "\n".join(HELP_LINES)


def parse_line(line: str) -> Tuple[str, str, bool]:
    """
    Split a chat line into (command, target, broadcast).

    ``/cmd`` replies privately, ``!cmd`` broadcasts; a bare word is treated
    as a private command.
    """
    line = line.strip()
    broadcast = line.startswith("!")
    if line[:1] in ("/", "!"):
        line = line[1:]
    command, _, target = line.partition(" ")
    return command.lower(), target.strip(), broadcast


def run_command(
    catalog: Catalog,
    command: str,
    target: str,
    broadcast: bool = False,
    rng: Optional[random.Random] = None,
) -> str:
    """Execute one dexsearch command and return the reply text."""
    try:
        if command == "help":
            if target.strip().lower() in COMMAND_ALIASES or not target.strip():
                return HELP_TEXT
            raise UnknownCommandError(target.strip())
        if command not in COMMAND_ALIASES:
            raise UnknownCommandError(command)
        if not target.strip():
            return HELP_TEXT
        return dex_search(catalog, target, broadcast=broadcast, rng=rng).render()
    except DexSearchError as exc:
        logger.debug("dexsearch %r rejected: %s", target, exc.message)
        return exc.message


def handle_line(catalog: Catalog, line: str, rng: Optional[random.Random] = None) -> str:
    """Parse and run a raw chat line."""
    command, target, broadcast = parse_line(line)
    return run_command(catalog, command, target, broadcast=broadcast, rng=rng)
