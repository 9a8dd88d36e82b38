"""Domain errors. All of them are local and recoverable by retrying the user action."""


class SprachAppError(Exception):
    """Base class for errors surfaced to the user."""


class MalformedBackup(SprachAppError):
    """A backup or stored document could not be parsed or has the wrong shape."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class CardNotFoundError(SprachAppError):
    """A review was submitted for a card id that is not in the deck."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"No card with id {card_id!r}")


class PackUnavailable(SprachAppError):
    """The language pack source could not be read."""
