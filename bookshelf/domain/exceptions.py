"""
Domain errors.

Only "not found" has its own type. Invalid inputs raise ValueError and
store failures surface as RuntimeError or ValueError from the adapters.
"""


class NotFoundError(LookupError):
    """An entity is absent or has been soft-deleted."""

    entity_name = "Entity"

    def __init__(self, entity_id: int) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity_name} not found for id: {entity_id}")


class AuthorNotFoundError(NotFoundError):
    entity_name = "Author"


class BookNotFoundError(NotFoundError):
    entity_name = "Book"
