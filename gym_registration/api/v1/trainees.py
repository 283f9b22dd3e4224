import logging

from gym_registration.api.dependencies import get_current_session
from gym_registration.api.errors import handle_service_errors
from gym_registration.api.mappers import trainee_to_message
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc
from gym_registration.core.context import AppContext
from gym_registration.core.exceptions import AlreadyExists, NotFound
from gym_registration.models.trainee import Trainee
from gym_registration.repositories.trainee_repository import TraineeRepository
from gym_registration.schemas.pagination import Pagination
from gym_registration.schemas.trainee import TraineeCreate, TraineeUpdate
from gym_registration.services.validation import parse_id, sparse_fields, validate_request

logger = logging.getLogger(__name__)


class TraineeServicer(pb2_grpc.TraineeServiceServicer):
    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_service_errors
    async def ListTrainees(self, request, context):
        """Постраничный список; по умолчанию 1-я страница по 20 записей"""
        get_current_session(self.ctx.auth, request, context)
        pagination = Pagination.from_request(
            request.pagination.page,
            request.pagination.page_size,
            default_page_size=self.ctx.settings.DEFAULT_PAGE_SIZE,
        )

        async with self.ctx.session() as db:
            trainees, total = await TraineeRepository(db).list_page(pagination.offset, pagination.page_size)
            return pb2.ListTraineesResponse(
                data=[trainee_to_message(t) for t in trainees],
                pagination=pb2.PaginationResponse(
                    page=pagination.page,
                    page_size=pagination.page_size,
                    total=total,
                ),
            )

    @handle_service_errors
    async def CreateTrainee(self, request, context):
        """Регистрация нового тренирующегося (токен не нужен)"""
        data = validate_request(
            TraineeCreate,
            name=request.name,
            email=request.email,
            password=request.password,
            timezone=request.timezone or None,
        )
        hashed_password = self.ctx.auth.hash_password(data.password)

        async with self.ctx.session() as db:
            repo = TraineeRepository(db)
            if await repo.get_by_email(data.email):
                raise AlreadyExists("Email is already in use")

            trainee = await repo.create_trainee(Trainee(
                name=data.name,
                email=data.email,
                password=hashed_password,
                timezone=data.timezone,
            ))
            logger.info(f"Создан тренирующийся {trainee.id}")
            return pb2.CreateTraineeResponse(trainee=trainee_to_message(trainee))

    @handle_service_errors
    async def GetTrainee(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")

        async with self.ctx.session() as db:
            trainee = await TraineeRepository(db).get_by_id(trainee_id)
            if not trainee:
                raise NotFound("Trainee")
            return pb2.GetTraineeResponse(trainee=trainee_to_message(trainee))

    @handle_service_errors
    async def UpdateTrainee(self, request, context):
        """Sparse-патч: пустые и отсутствующие поля не меняются"""
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")
        changes = validate_request(
            TraineeUpdate, **sparse_fields(request, "name", "email", "password", "timezone")
        ).model_dump(exclude_unset=True)
        if "password" in changes:
            changes["password"] = self.ctx.auth.hash_password(changes["password"])

        async with self.ctx.session() as db:
            repo = TraineeRepository(db)
            trainee = await repo.get_by_id(trainee_id)
            if not trainee:
                raise NotFound("Trainee")

            new_email = changes.get("email")
            if new_email and new_email != trainee.email and await repo.get_by_email(new_email):
                raise AlreadyExists("Email is already in use")

            trainee = await repo.update_trainee(trainee, changes)
            return pb2.UpdateTraineeResponse(trainee=trainee_to_message(trainee))

    @handle_service_errors
    async def DeleteTrainee(self, request, context):
        # Рутины и регистрации тренирующегося не удаляются каскадно
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")

        async with self.ctx.session() as db:
            repo = TraineeRepository(db)
            trainee = await repo.get_by_id(trainee_id)
            if not trainee:
                raise NotFound("Trainee")
            await repo.delete_trainee(trainee)
            logger.info(f"Тренирующийся {trainee_id} удалён")
            return pb2.DeleteTraineeResponse(success=True)
