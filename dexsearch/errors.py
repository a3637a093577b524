"""
dexsearch.errors – user-facing error taxonomy.

Every error here is recoverable: the command layer turns it into the reply
text and the host process keeps running.
"""

from __future__ import annotations


class DexSearchError(Exception):
    """Base class; ``message`` is what the user gets to see."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnclassifiableTokenError(DexSearchError):
    def __init__(self, token: str) -> None:
        super().__init__(f"'{token}' could not be found in any of the search categories.")
        self.token = token


class ConflictingPredicateError(DexSearchError):
    def __init__(self, category: str) -> None:
        super().__init__(f"A search cannot both exclude and include {category}.")
        self.category = category


class CardinalityExceededError(DexSearchError):
    pass


class UnknownMoveError(DexSearchError):
    def __init__(self, move: str) -> None:
        super().__init__(f"'{move}' is not a known move.")
        self.move = move


class EmptyQueryError(DexSearchError):
    def __init__(self) -> None:
        super().__init__(
            "No search parameters other than 'all' were found. "
            "Try '/help dexsearch' for more information on this command."
        )


class NotBroadcastableError(DexSearchError):
    def __init__(self) -> None:
        super().__init__("A search with the parameter 'all' cannot be broadcast.")


class UnknownCommandError(DexSearchError):
    def __init__(self, command: str) -> None:
        super().__init__(f"The command '{command}' was unrecognized.")
        self.command = command


class CatalogError(DexSearchError):
    """Raised by the catalog loader for malformed data files."""
