"""Application exceptions and their HTTP representation."""

from fastapi import status
from fastapi.responses import JSONResponse


class ApplicationException(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content={"error": self.message},
        )


class EntryValidationError(ApplicationException):
    """A submitted entry was rejected; the message is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class StoreError(ApplicationException):
    """Reading or writing a store failed."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class ConflictError(StoreError):
    """The remote blob changed between read and write."""

    def __init__(self, message: str = "Remote data changed during the update"):
        super().__init__(message)
        self.status_code = status.HTTP_409_CONFLICT


class AuthenticationError(ApplicationException):
    def __init__(self, message: str = "Missing or invalid data key"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)
