from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class DomainError(Exception):
    code = ErrorCode.INVALID_INPUT
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    pass


class AuthenticationError(DomainError):
    code = ErrorCode.NOT_AUTHENTICATED
    status_code = 401


class NotFoundError(DomainError):
    code = ErrorCode.NOT_FOUND
    status_code = 404


class ConflictError(DomainError):
    code = ErrorCode.CONFLICT
    status_code = 409


class StoreUnavailableError(DomainError):
    code = ErrorCode.STORE_UNAVAILABLE
    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
