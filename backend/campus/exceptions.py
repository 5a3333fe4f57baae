"""Domain errors raised by the service layer.

`campus.main` maps each of them onto an HTTP status code.
"""


class NotFoundError(LookupError):
    """A referenced faculty or student id does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ValidationError(ValueError):
    """Input that is well-formed JSON but not acceptable to the service."""


class ConflictError(ValueError):
    """The operation would break a relationship between stored records."""
