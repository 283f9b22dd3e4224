import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from gym_registration.core.base import Base

# Импортируем ВСЕ модели, чтобы они попали в Base.metadata
from gym_registration.models.trainee import Trainee
from gym_registration.models.workout import Workout
from gym_registration.models.routine import Routine
from gym_registration.models.registration import Registration

logger = logging.getLogger(__name__)


async def init_database(engine: AsyncEngine, reset: bool = False):
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        # Удаляем все таблицы если RESET_DATABASE=true
        if reset:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        # Создаем все таблицы
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Таблицы БД созданы/проверены")
