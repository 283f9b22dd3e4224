from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gym_registration.core.config import Settings
from gym_registration.core.db import create_engine, create_session_factory
from gym_registration.services.auth_service import AuthService


class AppContext:
    """
    Всё разделяемое состояние процесса: настройки, пул соединений,
    сервис аутентификации (с его списком отозванных токенов).
    Передаётся в каждый servicer явно.
    """

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker] = None,
        auth: Optional[AuthService] = None,
    ):
        self.settings = settings
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)
        self.auth = auth or AuthService(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.SESSION_EXPIRE_MINUTES,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        return cls(settings=settings, engine=engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Одна сессия БД на один RPC."""
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()
