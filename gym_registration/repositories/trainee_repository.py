from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_registration.core.exceptions import AlreadyExists
from gym_registration.models.trainee import Trainee


class TraineeRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, trainee_id: int) -> Optional[Trainee]:
        result = await self.db.execute(select(Trainee).where(Trainee.id == trainee_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Trainee]:
        result = await self.db.execute(select(Trainee).where(Trainee.email == email))
        return result.scalar_one_or_none()

    async def list_page(self, offset: int, limit: int) -> Tuple[List[Trainee], int]:
        """Страница тренирующихся и общее количество."""
        count_result = await self.db.execute(select(func.count()).select_from(Trainee))
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(Trainee).order_by(Trainee.id).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def create_trainee(self, trainee: Trainee) -> Trainee:
        self.db.add(trainee)
        await self._commit_unique_email()
        await self.db.refresh(trainee)
        return trainee

    async def update_trainee(self, trainee: Trainee, changes: dict) -> Trainee:
        for field, value in changes.items():
            setattr(trainee, field, value)
        # updated_at меняется даже при пустом патче
        trainee.updated_at = datetime.utcnow()
        await self._commit_unique_email()
        await self.db.refresh(trainee)
        return trainee

    async def delete_trainee(self, trainee: Trainee) -> None:
        await self.db.delete(trainee)
        await self.db.commit()

    async def _commit_unique_email(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            # Гонка двух регистраций с одним email
            await self.db.rollback()
            raise AlreadyExists("Email is already in use")
