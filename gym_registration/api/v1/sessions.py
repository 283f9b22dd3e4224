import logging

from gym_registration.api.dependencies import extract_token
from gym_registration.api.errors import handle_service_errors
from gym_registration.api.mappers import trainee_to_message
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc
from gym_registration.core.context import AppContext
from gym_registration.core.exceptions import InvalidCredentials, NotFound
from gym_registration.repositories.trainee_repository import TraineeRepository
from gym_registration.schemas.session import SessionCreate
from gym_registration.services.validation import validate_request

logger = logging.getLogger(__name__)


class SessionServicer(pb2_grpc.SessionServiceServicer):
    """Логин / логаут / проверка сессии."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_service_errors
    async def CreateSession(self, request, context):
        """Аутентификация по email/паролю и выдача JWT на 2 часа"""
        credentials = validate_request(SessionCreate, email=request.email, password=request.password)

        async with self.ctx.session() as db:
            trainee = await self.ctx.auth.authenticate_trainee(
                TraineeRepository(db), credentials.email, credentials.password
            )
            if not trainee:
                logger.warning(f"Неудачная попытка входа для {credentials.email}")
                raise InvalidCredentials()

            token = self.ctx.auth.create_session_token(trainee.id, trainee.email)
            logger.info(f"Сессия создана для тренирующегося {trainee.id}")
            return pb2.CreateSessionResponse(token=token, trainee=trainee_to_message(trainee))

    @handle_service_errors
    async def DeleteSession(self, request, context):
        """Логаут: токен попадает в список отозванных до конца своего срока"""
        token = extract_token(request, context)
        claims = self.ctx.auth.authenticate(token)
        self.ctx.auth.revoke(token, claims.expires_at)
        logger.info(f"Сессия тренирующегося {claims.trainee_id} завершена")
        return pb2.DeleteSessionResponse(message="Successfully logged out")

    @handle_service_errors
    async def CheckSession(self, request, context):
        claims = self.ctx.auth.authenticate(extract_token(request, context))

        async with self.ctx.session() as db:
            trainee = await TraineeRepository(db).get_by_id(claims.trainee_id)
            if not trainee:
                raise NotFound("Trainee")
            return pb2.CheckSessionResponse(authenticated=True, trainee=trainee_to_message(trainee))
