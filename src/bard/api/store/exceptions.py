class ReadOnlyError(Exception):
    """Raised when a write is attempted on a read-only store."""

    pass


class NotFoundError(LookupError):
    """Raised when a mutation targets a record that does not exist."""

    pass


class ContentIntegrityError(Exception):
    """Raised when stored rich-text content cannot be parsed.

    The stored record needs a manual fix; retrying will not help.
    """

    def __init__(self, collection: str, record_id: str | None, reason: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"Could not load content of {collection}/{record_id}: {reason}"
        )
