from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gym_registration.core.exceptions import InvalidArgument, InvalidField, MissingRequiredField

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _is_missing(error) -> bool:
    if error["type"] == "missing":
        return True
    # Значения proto3 по умолчанию: поле на проводе не передано
    value = error.get("input")
    return value is None or value == "" or value == [] or (type(value) is int and value == 0)


def validate_request(schema: Type[SchemaT], **fields) -> SchemaT:
    """
    Проверяет поля запроса схемой pydantic до любого обращения к БД.
    Все проваленные поля перечисляются в ошибке: MissingRequiredField, если
    ни одно из них не передано, иначе InvalidField.
    """
    try:
        return schema(**fields)
    except ValidationError as e:
        failed: List[str] = []
        errors = e.errors()
        for error in errors:
            name = str(error["loc"][0]) if error["loc"] else schema.__name__
            if name not in failed:
                failed.append(name)
        if all(_is_missing(error) for error in errors):
            raise MissingRequiredField(failed)
        raise InvalidField(failed)


def sparse_fields(request, *names: str) -> dict:
    """
    Поля sparse-патча: отсутствующее или пустое поле означает «не менять».
    Работает для proto3 optional-полей (HasField).
    """
    changes = {}
    for name in names:
        if not request.HasField(name):
            continue
        value = getattr(request, name)
        if value == "":
            continue
        changes[name] = value
    return changes


def parse_id(value: str, field: str) -> int:
    """Идентификаторы на проводе передаются десятичными строками."""
    if not value:
        raise MissingRequiredField([field])
    try:
        parsed = int(value)
    except ValueError:
        raise InvalidArgument(f"{field} must be a numeric id")
    if parsed <= 0:
        raise InvalidArgument(f"{field} must be a numeric id")
    return parsed


def optional_id(value: Optional[str], field: str) -> Optional[int]:
    return parse_id(value, field) if value else None
