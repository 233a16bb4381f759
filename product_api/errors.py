# product_api/errors.py
from enum import Enum
from typing import Any, Dict


class ErrorKind(Enum):
    NOT_FOUND = ("NotFoundError", 404)
    VALIDATION = ("ValidationError", 400)
    AUTHENTICATION = ("AuthenticationError", 401)
    INTERNAL = ("InternalServerError", 500)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def status_code(self) -> int:
        return self.value[1]


INTERNAL_MESSAGE = "Internal Server Error"


class ApiError(Exception):
    """A classified failure. The kind decides the HTTP status at the app boundary."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def name(self) -> str:
        return self.kind.label

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_envelope(self) -> Dict[str, Any]:
        return {
            "error": {
                "name": self.name,
                "message": self.message,
                "statusCode": self.status_code,
            }
        }

    def __repr__(self) -> str:
        return f"ApiError({self.name}, {self.message!r})"


def not_found(message: str) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def validation_error(message: str) -> ApiError:
    return ApiError(ErrorKind.VALIDATION, message)


def authentication_error(message: str) -> ApiError:
    return ApiError(ErrorKind.AUTHENTICATION, message)


def internal_error() -> ApiError:
    return ApiError(ErrorKind.INTERNAL, INTERNAL_MESSAGE)
