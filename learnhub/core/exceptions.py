"""
Error taxonomy shared by services and routes.

The HTTP-facing errors subclass HTTPException so a service can raise them
directly and routes let them propagate. The document store raises the
DocumentStoreError family; workflows translate those into StoreFailure.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Referenced entity id does not resolve."""

    def __init__(self, entity: str = "Resource"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")


class ValidationFailure(HTTPException):
    """Caller-supplied field fails a length/shape rule before persistence."""

    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)


class PermissionDenied(HTTPException):
    def __init__(self, detail: str = "You are not allowed to perform this action"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class StoreFailure(HTTPException):
    """A document store call failed while running a workflow; remaining steps were skipped."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}. Please try again."
        )


class DocumentStoreError(Exception):
    """Raised by the document store adapter when a call to the backing store rejects."""

    def __init__(self, operation: str, table: str, cause: Exception = None):
        self.operation = operation
        self.table = table
        self.cause = cause
        super().__init__(f"{operation} on {table} failed: {cause}")


class DuplicateRecordError(DocumentStoreError):
    """Insert collided with an existing primary key."""
