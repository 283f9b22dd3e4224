from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_registration.models.routine import Routine


class RoutineRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_routines(self, trainee_id: Optional[int] = None) -> List[Routine]:
        query = select(Routine)
        if trainee_id is not None:
            query = query.where(Routine.user_id == trainee_id)
        result = await self.db.execute(
            query.order_by(Routine.created_at.desc(), Routine.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, routine_id: int) -> Optional[Routine]:
        result = await self.db.execute(
            select(Routine)
            .where(Routine.id == routine_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_first_by_trainee(self, trainee_id: int) -> Optional[Routine]:
        """У тренирующегося может быть несколько рутин, берём самую раннюю."""
        result = await self.db.execute(
            select(Routine)
            .where(Routine.user_id == trainee_id)
            .order_by(Routine.id)
            .limit(1)
        )
        return result.scalars().first()

    async def create_routine(self, routine: Routine) -> Routine:
        self.db.add(routine)
        await self.db.commit()
        # Перечитываем вместе с trainee
        return await self.get_by_id(routine.id)

    async def update_availability(self, routine: Routine, availability: str) -> Routine:
        routine.availability = availability
        routine.updated_at = datetime.utcnow()
        await self.db.commit()
        return await self.get_by_id(routine.id)

    async def delete_routine(self, routine: Routine) -> None:
        await self.db.delete(routine)
        await self.db.commit()
