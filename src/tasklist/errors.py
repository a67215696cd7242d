# SPDX-License-Identifier: MIT


class TasklistError(Exception):
    pass


class ValidationError(TasklistError):
    """Input rejected before any store operation was attempted."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class PersistenceError(TasklistError):
    """A store write or delete failed; the operation was abandoned."""


class SubscriptionError(TasklistError):
    """The live task feed failed; the view holding it can no longer be used."""
