from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_registration.models.registration import Registration


class RegistrationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Registration]:
        result = await self.db.execute(
            select(Registration).order_by(Registration.created_at.desc(), Registration.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, registration_id: int) -> Optional[Registration]:
        result = await self.db.execute(
            select(Registration)
            .where(Registration.id == registration_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_registration(self, registration: Registration) -> Registration:
        self.db.add(registration)
        await self.db.commit()
        return await self.get_by_id(registration.id)

    async def update_registration(self, registration: Registration, changes: dict) -> Registration:
        for field, value in changes.items():
            setattr(registration, field, value)
        registration.updated_at = datetime.utcnow()
        await self.db.commit()
        # user_id мог смениться, trainee перечитывается вместе со строкой
        self.db.expire(registration, ["trainee"])
        return await self.get_by_id(registration.id)

    async def delete_registration(self, registration: Registration) -> None:
        await self.db.delete(registration)
        await self.db.commit()
