"""
Преобразования между хранилищем (ORM) и проводом (protobuf).

- datetime <-> google.protobuf.Timestamp с точностью до миллисекунд;
- пароль тренирующегося наружу не уходит никогда;
- слоты расписания хранятся JSON-строкой, порядок сохраняется как есть.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from google.protobuf.timestamp_pb2 import Timestamp

from gym_registration.api.protos import gym_registration_pb2 as pb2
from gym_registration.core.exceptions import InvalidArgument
from gym_registration.models.registration import Registration
from gym_registration.models.routine import Routine
from gym_registration.models.trainee import Trainee
from gym_registration.models.workout import Workout

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


# ==========================
# ВРЕМЯ
# ==========================

def datetime_to_epoch_ms(value: datetime) -> int:
    # Наивные datetime в БД всегда в UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // ONE_MILLISECOND


def epoch_ms_to_datetime(epoch_ms: int) -> datetime:
    return (EPOCH + timedelta(milliseconds=epoch_ms)).replace(tzinfo=None)


def datetime_to_timestamp(value: Optional[datetime]) -> Optional[Timestamp]:
    if value is None:
        return None
    epoch_ms = datetime_to_epoch_ms(value)
    return Timestamp(seconds=epoch_ms // 1000, nanos=(epoch_ms % 1000) * 1_000_000)


def timestamp_to_datetime(value: Optional[Timestamp]) -> Optional[datetime]:
    if value is None:
        return None
    return epoch_ms_to_datetime(value.seconds * 1000 + value.nanos // 1_000_000)


def request_timestamp(request, field: str) -> Optional[datetime]:
    """Timestamp из запроса, если поле выставлено клиентом."""
    if not request.HasField(field):
        return None
    try:
        return timestamp_to_datetime(getattr(request, field))
    except (OverflowError, ValueError):
        # За пределами диапазона datetime
        raise InvalidArgument(f"{field} is out of range")


# ==========================
# СЛОТЫ РАСПИСАНИЯ
# ==========================

def time_slots_to_dicts(slots: Iterable) -> List[dict]:
    return [
        {"day": slot.day, "start_time": slot.start_time, "end_time": slot.end_time}
        for slot in slots
    ]


def dump_availability(slots: Iterable) -> str:
    return json.dumps(time_slots_to_dicts(slots))


def load_availability(blob: Optional[str]) -> List[dict]:
    if not blob:
        return []
    return json.loads(blob)


# ==========================
# СУЩНОСТИ
# ==========================

def _copy_timestamps(message, **values: Optional[datetime]):
    # Незаданное время оставляет поле сообщения пустым
    for field, value in values.items():
        if value is not None:
            getattr(message, field).CopyFrom(datetime_to_timestamp(value))
    return message


def trainee_to_message(trainee: Trainee) -> pb2.TraineeWithoutPassword:
    message = pb2.TraineeWithoutPassword(
        id=str(trainee.id),
        name=trainee.name,
        email=trainee.email,
        timezone=trainee.timezone or "",
    )
    return _copy_timestamps(message, created_at=trainee.created_at, updated_at=trainee.updated_at)


def workout_to_message(workout: Workout) -> pb2.Workout:
    message = pb2.Workout(
        id=str(workout.id),
        name=workout.name,
        duration=workout.duration,
        description=workout.description or "",
        color=workout.color or "",
    )
    return _copy_timestamps(message, created_at=workout.created_at, updated_at=workout.updated_at)


def routine_to_message(routine: Routine) -> pb2.Routine:
    message = pb2.Routine(
        id=str(routine.id),
        user_id=str(routine.user_id),
        availability=[pb2.TimeSlot(**slot) for slot in load_availability(routine.availability)],
    )
    if routine.trainee is not None:
        message.trainee.CopyFrom(trainee_to_message(routine.trainee))
    return _copy_timestamps(message, created_at=routine.created_at, updated_at=routine.updated_at)


def registration_to_message(registration: Registration) -> pb2.Registration:
    message = pb2.Registration(
        id=str(registration.id),
        event_id=registration.event_id,
        user_id=str(registration.user_id),
        invitee_email=registration.invitee_email,
        status=registration.status,
    )
    if registration.trainee is not None:
        message.trainee.CopyFrom(trainee_to_message(registration.trainee))
    return _copy_timestamps(
        message,
        start_time=registration.start_time,
        end_time=registration.end_time,
        created_at=registration.created_at,
        updated_at=registration.updated_at,
    )
