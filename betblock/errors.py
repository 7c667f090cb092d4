"""Error types raised by the account, goal and storage layers.

Every error is terminal for the operation that raised it only; front-ends
catch them, show a message and carry on.
"""

from __future__ import annotations


class BetBlockError(Exception):
    """Base class for all BetBlock errors."""


class ValidationError(BetBlockError):
    """Malformed or missing user input."""


class DuplicateUserError(BetBlockError):
    """A registration used a username that is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' is already taken.")
        self.username = username


class InvalidCredentialsError(BetBlockError):
    """Login failed. The message never says which field was wrong."""

    def __init__(self) -> None:
        super().__init__("Incorrect username or password.")


class StorageError(BetBlockError):
    """The local store could not be read or written."""
