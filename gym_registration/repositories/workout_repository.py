from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_registration.models.workout import Workout


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Workout]:
        result = await self.db.execute(
            select(Workout).order_by(Workout.created_at.desc(), Workout.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, workout_id: int) -> Optional[Workout]:
        result = await self.db.execute(select(Workout).where(Workout.id == workout_id))
        return result.scalar_one_or_none()

    async def create_workout(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.db.commit()
        await self.db.refresh(workout)
        return workout

    async def update_workout(self, workout: Workout, changes: dict) -> Workout:
        for field, value in changes.items():
            setattr(workout, field, value)
        workout.updated_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(workout)
        return workout

    async def delete_workout(self, workout: Workout) -> None:
        await self.db.delete(workout)
        await self.db.commit()
