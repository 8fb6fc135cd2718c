class ApplicationError(Exception):
    """Base class for application-specific errors."""
    pass

class StartupError(ApplicationError):
    """Raised when the table store cannot be configured or reached at startup."""
    pass

class StorageError(ApplicationError):
    """Raised when writing to the table store fails."""
    def __init__(self, message="A storage error occurred.", original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception

class ProductAlreadyExistsError(StorageError):
    """Raised when a product with the same partition and row key already exists."""
    pass
