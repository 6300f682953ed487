"""Store-level errors. The API layer maps each one to an HTTP status."""


class StoreError(Exception):
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    http_status = 404


class OwnershipError(StoreError):
    """Raised when a caller asks for a record that belongs to someone else."""
    http_status = 403


class DuplicateError(StoreError):
    """A unique constraint (e-mail, one survey per user, sponsor pair) was hit."""
    http_status = 409
