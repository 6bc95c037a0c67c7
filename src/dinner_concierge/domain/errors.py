"""Error taxonomy for the dinner concierge."""


class DinnerConciergeError(Exception):
    """Base class for all application errors."""


class ConfigurationError(DinnerConciergeError):
    """A required setting (such as an API key) is missing."""


class ExtractionError(DinnerConciergeError):
    """The menu extraction call failed or returned unusable data."""


class DecodeError(DinnerConciergeError):
    """A share payload could not be decoded."""


class PersistenceError(DinnerConciergeError):
    """The local key-value store could not be read or written."""


class InvalidTransitionError(DinnerConciergeError):
    """An action is not allowed in the current view."""


class UnknownMemberError(DinnerConciergeError):
    """A name is not part of the household roster."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown household member: {name}")
        self.name = name


class UnknownItemError(DinnerConciergeError):
    """A menu item id does not exist in the addressed category."""

    def __init__(self, item_id: str, category: str | None = None) -> None:
        where = f" in {category}" if category else ""
        super().__init__(f"Unknown menu item{where}: {item_id}")
        self.item_id = item_id
        self.category = category
