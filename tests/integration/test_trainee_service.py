"""
Интеграционные тесты TraineeService.

Покрываемые сценарии:
- CreateTrainee: успех, дубликат email, пустые поля, пароль не отдаётся
- ListTrainees: пагинация, значения по умолчанию
- GetTrainee: успех, неизвестный id, нечисловой id
- UpdateTrainee: sparse-патч, смена пароля, конфликт email, пустой патч
- DeleteTrainee: успех и повторное удаление
- отсутствие/отзыв токена
"""

import asyncio

import pytest
import grpc

from gym_registration.api.mappers import timestamp_to_datetime
from gym_registration.api.protos import gym_registration_pb2 as pb2
from gym_registration.repositories.trainee_repository import TraineeRepository
from tests.conftest import AbortCalled, create_trainee

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# CreateTrainee
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_trainee_success(trainees, context):
    response = await trainees.CreateTrainee(
        pb2.CreateTraineeRequest(name="Bob", email="bob@example.com", password="pw", timezone="UTC"),
        context,
    )

    assert response.trainee.id
    assert response.trainee.name == "Bob"
    assert response.trainee.timezone == "UTC"
    assert response.trainee.HasField("created_at")


@pytest.mark.asyncio
async def test_create_trainee_stores_bcrypt_hash(ctx, trainees, trainee):
    async with ctx.session() as db:
        stored = await TraineeRepository(db).get_by_id(int(trainee.id))

    assert stored.password != "password123"
    assert ctx.auth.verify_password("password123", stored.password)


@pytest.mark.asyncio
async def test_create_trainee_duplicate_email_already_exists(trainees, trainee, token, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.CreateTrainee(
            pb2.CreateTraineeRequest(name="Other", email=trainee.email, password="pw"), context
        )

    assert exc_info.value.code == grpc.StatusCode.ALREADY_EXISTS

    # Существующая запись не тронута, новая не добавлена
    response = await trainees.ListTrainees(pb2.ListTraineesRequest(token=token), context)
    assert response.pagination.total == 1
    assert [t.name for t in response.data] == [trainee.name]


@pytest.mark.asyncio
async def test_create_trainee_missing_fields(trainees, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.CreateTrainee(pb2.CreateTraineeRequest(email="x@example.com"), context)

    assert exc_info.value.code == grpc.StatusCode.INVALID_ARGUMENT
    assert exc_info.value.details == "Missing required field(s): name, password"


# ---------------------------------------------------------------------------
# ListTrainees
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_trainees_second_page(trainees, trainee, token, context):
    for i in range(2, 13):
        await create_trainee(trainees, name=f"T{i}", email=f"t{i}@example.com")

    response = await trainees.ListTrainees(
        pb2.ListTraineesRequest(token=token, pagination=pb2.PaginationRequest(page=2, page_size=5)),
        context,
    )

    assert [t.name for t in response.data] == ["T6", "T7", "T8", "T9", "T10"]
    assert response.pagination.page == 2
    assert response.pagination.page_size == 5
    assert response.pagination.total == 12


@pytest.mark.asyncio
async def test_list_trainees_defaults(trainees, trainee, token, context):
    response = await trainees.ListTrainees(pb2.ListTraineesRequest(token=token), context)

    assert len(response.data) == 1
    assert response.pagination.page == 1
    assert response.pagination.page_size == 20
    assert response.pagination.total == 1


@pytest.mark.asyncio
async def test_list_trainees_without_token(trainees, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.ListTrainees(pb2.ListTraineesRequest(), context)
    assert exc_info.value.code == grpc.StatusCode.UNAUTHENTICATED


# ---------------------------------------------------------------------------
# GetTrainee
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_trainee(trainees, trainee, token, context):
    response = await trainees.GetTrainee(pb2.GetTraineeRequest(token=token, trainee_id=trainee.id), context)
    assert response.trainee == trainee


@pytest.mark.asyncio
async def test_get_unknown_trainee_not_found(trainees, token, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.GetTrainee(pb2.GetTraineeRequest(token=token, trainee_id="999"), context)

    assert exc_info.value.code == grpc.StatusCode.NOT_FOUND
    assert exc_info.value.details == "Trainee not found"


@pytest.mark.asyncio
async def test_get_trainee_non_numeric_id(trainees, token, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.GetTrainee(pb2.GetTraineeRequest(token=token, trainee_id="abc"), context)
    assert exc_info.value.code == grpc.StatusCode.INVALID_ARGUMENT


@pytest.mark.asyncio
async def test_get_trainee_revoked_token(ctx, trainees, trainee, token, context):
    ctx.auth.revoke(token, ctx.auth.decode_token(token).expires_at)

    with pytest.raises(AbortCalled) as exc_info:
        await trainees.GetTrainee(pb2.GetTraineeRequest(token=token, trainee_id=trainee.id), context)
    assert exc_info.value.code == grpc.StatusCode.UNAUTHENTICATED


# ---------------------------------------------------------------------------
# UpdateTrainee
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_trainee_sparse(trainees, trainee, token, context):
    response = await trainees.UpdateTrainee(
        pb2.UpdateTraineeRequest(token=token, trainee_id=trainee.id, name="Alice B.", email=""),
        context,
    )

    assert response.trainee.name == "Alice B."
    assert response.trainee.email == trainee.email
    assert response.trainee.timezone == trainee.timezone


@pytest.mark.asyncio
async def test_update_trainee_empty_patch_only_touches_updated_at(trainees, trainee, token, context):
    await asyncio.sleep(0.01)
    response = await trainees.UpdateTrainee(
        pb2.UpdateTraineeRequest(token=token, trainee_id=trainee.id), context
    )

    updated = response.trainee
    assert (updated.name, updated.email, updated.timezone) == (trainee.name, trainee.email, trainee.timezone)
    assert updated.created_at == trainee.created_at
    assert timestamp_to_datetime(updated.updated_at) > timestamp_to_datetime(trainee.updated_at)


@pytest.mark.asyncio
async def test_update_trainee_password_allows_new_login(trainees, sessions, trainee, token, context):
    await trainees.UpdateTrainee(
        pb2.UpdateTraineeRequest(token=token, trainee_id=trainee.id, password="new-password"), context
    )

    response = await sessions.CreateSession(
        pb2.CreateSessionRequest(email=trainee.email, password="new-password"), context
    )
    assert response.trainee.id == trainee.id

    with pytest.raises(AbortCalled):
        await sessions.CreateSession(
            pb2.CreateSessionRequest(email=trainee.email, password="password123"), context
        )


@pytest.mark.asyncio
async def test_update_trainee_email_conflict(trainees, trainee, token, context):
    other = await create_trainee(trainees, name="Bob", email="bob@example.com")

    with pytest.raises(AbortCalled) as exc_info:
        await trainees.UpdateTrainee(
            pb2.UpdateTraineeRequest(token=token, trainee_id=other.id, email=trainee.email), context
        )
    assert exc_info.value.code == grpc.StatusCode.ALREADY_EXISTS


@pytest.mark.asyncio
async def test_update_unknown_trainee_not_found(trainees, token, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.UpdateTrainee(
            pb2.UpdateTraineeRequest(token=token, trainee_id="999", name="X"), context
        )
    assert exc_info.value.code == grpc.StatusCode.NOT_FOUND


# ---------------------------------------------------------------------------
# DeleteTrainee
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_trainee(trainees, trainee, token, context):
    response = await trainees.DeleteTrainee(
        pb2.DeleteTraineeRequest(token=token, trainee_id=trainee.id), context
    )
    assert response.success is True

    with pytest.raises(AbortCalled) as exc_info:
        await trainees.DeleteTrainee(pb2.DeleteTraineeRequest(token=token, trainee_id=trainee.id), context)
    assert exc_info.value.code == grpc.StatusCode.NOT_FOUND


@pytest.mark.asyncio
async def test_delete_trainee_missing_id(trainees, token, context):
    with pytest.raises(AbortCalled) as exc_info:
        await trainees.DeleteTrainee(pb2.DeleteTraineeRequest(token=token), context)

    assert exc_info.value.code == grpc.StatusCode.INVALID_ARGUMENT
    assert "trainee_id" in exc_info.value.details
