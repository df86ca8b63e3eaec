from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


class ValidationException(AppException):
    """A required field is missing or malformed."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(400, message, ErrorCode.VALIDATION_ERROR, details)


class NotFoundException(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        super().__init__(404, message, error_code)


class DuplicateIdException(AppException):
    """Raised when a create resolves to an id that is already stored."""

    def __init__(self, message: str, doc_id: str):
        super().__init__(409, message, ErrorCode.DUPLICATE_ID, {"id": doc_id})


class ConflictException(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
    ):
        super().__init__(409, message, error_code)


class SupplierCreationFailed(AppException):
    """Non-fatal during import: the row proceeds without a supplier."""

    def __init__(self, supplier_name: str, reason: str):
        super().__init__(
            502,
            f'Failed to create supplier "{supplier_name}": {reason}',
            ErrorCode.SUPPLIER_CREATION_FAILED,
            {"supplier_name": supplier_name},
        )
