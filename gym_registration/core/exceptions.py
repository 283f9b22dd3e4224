"""
Типизированные ошибки сервиса.

Каждый класс знает свой gRPC-статус; перевод в ответ клиенту делает
декоратор handle_service_errors на границе RPC.
"""

from typing import Iterable

import grpc


class ServiceError(Exception):
    status_code = grpc.StatusCode.INTERNAL
    default_detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ServiceError):
    status_code = grpc.StatusCode.UNAUTHENTICATED
    default_detail = "Unauthenticated"


class MissingToken(Unauthenticated):
    default_detail = "Authorization token missing"


class RevokedToken(Unauthenticated):
    default_detail = "Token is revoked"


class InvalidToken(Unauthenticated):
    """Битый, просроченный или неверно подписанный токен (не различаются)."""
    default_detail = "Invalid token"


class InvalidCredentials(Unauthenticated):
    default_detail = "Invalid credentials"


class InvalidArgument(ServiceError):
    status_code = grpc.StatusCode.INVALID_ARGUMENT
    default_detail = "Invalid argument"


class MissingRequiredField(InvalidArgument):
    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class AlreadyExists(ServiceError):
    status_code = grpc.StatusCode.ALREADY_EXISTS
    default_detail = "Already exists"


class NotFound(ServiceError):
    status_code = grpc.StatusCode.NOT_FOUND

    def __init__(self, entity: str = "Entity"):
        self.entity = entity
        super().__init__(f"{entity} not found")


class InvalidField(InvalidArgument):
    """Поле передано, но значение не проходит проверку."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Invalid or missing field(s): {', '.join(self.fields)}")
