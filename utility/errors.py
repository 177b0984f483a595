class ObjectiveBotError(Exception):
    """Base class for errors raised by the objective bot."""


class ValidationError(ObjectiveBotError):
    """Input outside the fixed vocabularies or an invalid duration. Nothing was changed."""


class TransientIOError(ObjectiveBotError):
    """Status fetch or board publish failed. The next tick retries naturally."""


class StoreError(ObjectiveBotError):
    """The objective database failed. Only the current operation is aborted."""
