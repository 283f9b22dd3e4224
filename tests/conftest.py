"""
Общие фикстуры для всех тестов gym_registration.

Стратегия:
- Servicer'ы вызываются напрямую; grpc.aio.ServicerContext заменяется на FakeContext,
  abort() которого бросает AbortCalled с кодом и текстом ошибки.
- БД: in-memory sqlite+aiosqlite на StaticPool (одно соединение на тест),
  таблицы создаются через init_database.
- Для сценариев с моками репозитории подменяются через patch.object + AsyncMock.
- Токены выдаются тем же AuthService, что лежит в AppContext.
"""

import pytest
from typing import AsyncGenerator, Optional, Sequence, Tuple

import grpc
from sqlalchemy.pool import StaticPool

from gym_registration.api.protos import gym_registration_pb2 as pb2
from gym_registration.api.v1.registrations import RegistrationServicer
from gym_registration.api.v1.routines import RoutineServicer
from gym_registration.api.v1.sessions import SessionServicer
from gym_registration.api.v1.trainees import TraineeServicer
from gym_registration.api.v1.workouts import WorkoutServicer
from gym_registration.core.config import Settings
from gym_registration.core.context import AppContext
from gym_registration.core.database import init_database
from gym_registration.core.db import create_engine
from gym_registration.services.auth_service import AuthService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"


# ---------------------------------------------------------------------------
# Поддельный контекст RPC
# ---------------------------------------------------------------------------

class AbortCalled(Exception):
    """Аналог grpc.aio.AbortError: фиксирует статус, с которым завершён RPC."""

    def __init__(self, code: grpc.StatusCode, details: str):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class FakeContext:
    def __init__(self, metadata: Optional[Sequence[Tuple[str, str]]] = None):
        self._metadata = tuple(metadata or ())

    def invocation_metadata(self):
        return self._metadata

    async def abort(self, code: grpc.StatusCode, details: str = ""):
        raise AbortCalled(code, details)


# ---------------------------------------------------------------------------
# Настройки, БД и контекст приложения
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings() -> Settings:
    return Settings(DATABASE_URL=TEST_DATABASE_URL, SECRET_KEY=TEST_SECRET_KEY)


@pytest.fixture
def auth() -> AuthService:
    return AuthService(secret_key=TEST_SECRET_KEY)


@pytest.fixture
async def ctx(test_settings) -> AsyncGenerator[AppContext, None]:
    """AppContext поверх чистой in-memory БД."""
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_database(engine)
    app_ctx = AppContext(settings=test_settings, engine=engine)
    yield app_ctx
    await app_ctx.dispose()


@pytest.fixture
def context() -> FakeContext:
    return FakeContext()


# ---------------------------------------------------------------------------
# Servicer'ы
# ---------------------------------------------------------------------------

@pytest.fixture
def sessions(ctx) -> SessionServicer:
    return SessionServicer(ctx)


@pytest.fixture
def trainees(ctx) -> TraineeServicer:
    return TraineeServicer(ctx)


@pytest.fixture
def workouts(ctx) -> WorkoutServicer:
    return WorkoutServicer(ctx)


@pytest.fixture
def routines(ctx) -> RoutineServicer:
    return RoutineServicer(ctx)


@pytest.fixture
def registrations(ctx) -> RegistrationServicer:
    return RegistrationServicer(ctx)


# ---------------------------------------------------------------------------
# Готовые данные
# ---------------------------------------------------------------------------

async def create_trainee(
    trainees: TraineeServicer,
    name: str = "Alice",
    email: str = "alice@example.com",
    password: str = "password123",
    timezone: str = "Europe/Moscow",
):
    """Зарегистрировать тренирующегося через CreateTrainee и вернуть сообщение."""
    response = await trainees.CreateTrainee(
        pb2.CreateTraineeRequest(name=name, email=email, password=password, timezone=timezone),
        FakeContext(),
    )
    return response.trainee


@pytest.fixture
async def trainee(trainees):
    return await create_trainee(trainees)


@pytest.fixture
def token(ctx, trainee) -> str:
    """Валидный токен сессии для trainee."""
    return ctx.auth.create_session_token(int(trainee.id), trainee.email)
