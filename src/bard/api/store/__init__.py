from bard.api.store.engine import Store
from bard.api.store.exceptions import ContentIntegrityError, NotFoundError, ReadOnlyError

__all__ = ["ContentIntegrityError", "NotFoundError", "ReadOnlyError", "Store"]
