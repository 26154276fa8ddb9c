class RecordNotFoundError(Exception):
    """Raised when a credit/debit id is missing from the store."""


class StorageUnavailableError(Exception):
    """Raised when the record store could not complete an operation."""
