from gym_registration.api.dependencies import get_current_session
from gym_registration.api.errors import handle_service_errors
from gym_registration.api.mappers import registration_to_message, request_timestamp
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc
from gym_registration.core.context import AppContext
from gym_registration.core.exceptions import NotFound
from gym_registration.models.registration import Registration
from gym_registration.repositories.registration_repository import RegistrationRepository
from gym_registration.repositories.trainee_repository import TraineeRepository
from gym_registration.schemas.registration import RegistrationCreate, RegistrationUpdate
from gym_registration.services.validation import parse_id, sparse_fields, validate_request


class RegistrationServicer(pb2_grpc.RegistrationServiceServicer):
    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_service_errors
    async def ListRegistrations(self, request, context):
        get_current_session(self.ctx.auth, request, context)

        async with self.ctx.session() as db:
            registrations = await RegistrationRepository(db).list_all()
            return pb2.ListRegistrationsResponse(
                registrations=[registration_to_message(r) for r in registrations]
            )

    @handle_service_errors
    async def CreateRegistration(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        data = validate_request(
            RegistrationCreate,
            event_id=request.event_id,
            user_id=request.user_id,
            invitee_email=request.invitee_email,
            start_time=request_timestamp(request, "start_time"),
            end_time=request_timestamp(request, "end_time"),
            status=request.status,
        )
        trainee_id = parse_id(data.user_id, "user_id")

        async with self.ctx.session() as db:
            if not await TraineeRepository(db).get_by_id(trainee_id):
                raise NotFound("Trainee")

            registration = await RegistrationRepository(db).create_registration(Registration(
                event_id=data.event_id,
                user_id=trainee_id,
                invitee_email=data.invitee_email,
                start_time=data.start_time,
                end_time=data.end_time,
                status=data.status,
            ))
            return pb2.CreateRegistrationResponse(registration=registration_to_message(registration))

    @handle_service_errors
    async def GetRegistration(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        registration_id = parse_id(request.registration_id, "registration_id")

        async with self.ctx.session() as db:
            registration = await RegistrationRepository(db).get_by_id(registration_id)
            if not registration:
                raise NotFound("Registration")
            return pb2.GetRegistrationResponse(registration=registration_to_message(registration))

    @handle_service_errors
    async def UpdateRegistration(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        registration_id = parse_id(request.registration_id, "registration_id")

        fields = sparse_fields(request, "event_id", "user_id", "invitee_email", "status")
        for name in ("start_time", "end_time"):
            value = request_timestamp(request, name)
            if value is not None:
                fields[name] = value
        changes = validate_request(RegistrationUpdate, **fields).model_dump(exclude_unset=True)
        if "user_id" in changes:
            changes["user_id"] = parse_id(changes["user_id"], "user_id")

        async with self.ctx.session() as db:
            repo = RegistrationRepository(db)
            registration = await repo.get_by_id(registration_id)
            if not registration:
                raise NotFound("Registration")
            if "user_id" in changes and not await TraineeRepository(db).get_by_id(changes["user_id"]):
                raise NotFound("Trainee")

            registration = await repo.update_registration(registration, changes)
            return pb2.UpdateRegistrationResponse(registration=registration_to_message(registration))

    @handle_service_errors
    async def DeleteRegistration(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        registration_id = parse_id(request.registration_id, "registration_id")

        async with self.ctx.session() as db:
            repo = RegistrationRepository(db)
            registration = await repo.get_by_id(registration_id)
            if not registration:
                raise NotFound("Registration")
            await repo.delete_registration(registration)
            return pb2.DeleteRegistrationResponse(success=True)
