from gym_registration.api.dependencies import get_current_session
from gym_registration.api.errors import handle_service_errors
from gym_registration.api.mappers import dump_availability, routine_to_message, time_slots_to_dicts
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc
from gym_registration.core.context import AppContext
from gym_registration.core.exceptions import NotFound
from gym_registration.models.routine import Routine
from gym_registration.repositories.routine_repository import RoutineRepository
from gym_registration.repositories.trainee_repository import TraineeRepository
from gym_registration.schemas.routine import RoutineCreate, RoutineUpdate
from gym_registration.services.validation import optional_id, parse_id, validate_request


class RoutineServicer(pb2_grpc.RoutineServiceServicer):
    """
    Расписания доступности тренирующихся.

    Get/Update/Delete адресуются по trainee_id; если рутин у тренирующегося
    несколько, операция применяется к самой ранней.
    """

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_service_errors
    async def ListRoutines(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        trainee_id = optional_id(
            request.trainee_id if request.HasField("trainee_id") else None, "trainee_id"
        )

        async with self.ctx.session() as db:
            routines = await RoutineRepository(db).list_routines(trainee_id)
            return pb2.ListRoutinesResponse(routines=[routine_to_message(r) for r in routines])

    @handle_service_errors
    async def CreateRoutine(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        data = validate_request(
            RoutineCreate,
            user_id=request.user_id,
            availability=time_slots_to_dicts(request.availability),
        )
        trainee_id = parse_id(data.user_id, "user_id")

        async with self.ctx.session() as db:
            if not await TraineeRepository(db).get_by_id(trainee_id):
                raise NotFound("Trainee")

            routine = await RoutineRepository(db).create_routine(Routine(
                user_id=trainee_id,
                availability=dump_availability(data.availability),
            ))
            return pb2.CreateRoutineResponse(routine=routine_to_message(routine))

    @handle_service_errors
    async def GetTraineeRoutine(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")

        async with self.ctx.session() as db:
            routine = await RoutineRepository(db).get_first_by_trainee(trainee_id)
            if not routine:
                raise NotFound("Routine")
            return pb2.GetTraineeRoutineResponse(routine=routine_to_message(routine))

    @handle_service_errors
    async def UpdateTraineeRoutine(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")
        data = validate_request(RoutineUpdate, availability=time_slots_to_dicts(request.availability))

        async with self.ctx.session() as db:
            repo = RoutineRepository(db)
            routine = await repo.get_first_by_trainee(trainee_id)
            if not routine:
                raise NotFound("Routine")
            routine = await repo.update_availability(routine, dump_availability(data.availability))
            return pb2.UpdateTraineeRoutineResponse(routine=routine_to_message(routine))

    @handle_service_errors
    async def DeleteTraineeRoutine(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        trainee_id = parse_id(request.trainee_id, "trainee_id")

        async with self.ctx.session() as db:
            repo = RoutineRepository(db)
            routine = await repo.get_first_by_trainee(trainee_id)
            if not routine:
                raise NotFound("Routine")
            await repo.delete_routine(routine)
            return pb2.DeleteTraineeRoutineResponse(success=True)
