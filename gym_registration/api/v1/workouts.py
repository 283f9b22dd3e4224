from gym_registration.api.dependencies import get_current_session
from gym_registration.api.errors import handle_service_errors
from gym_registration.api.mappers import workout_to_message
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc
from gym_registration.core.context import AppContext
from gym_registration.core.exceptions import NotFound
from gym_registration.models.workout import Workout
from gym_registration.repositories.workout_repository import WorkoutRepository
from gym_registration.schemas.workout import WorkoutCreate, WorkoutUpdate
from gym_registration.services.validation import parse_id, sparse_fields, validate_request


class WorkoutServicer(pb2_grpc.WorkoutServiceServicer):
    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_service_errors
    async def ListWorkouts(self, request, context):
        get_current_session(self.ctx.auth, request, context)

        async with self.ctx.session() as db:
            workouts = await WorkoutRepository(db).list_all()
            return pb2.ListWorkoutsResponse(workouts=[workout_to_message(w) for w in workouts])

    @handle_service_errors
    async def CreateWorkout(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        data = validate_request(
            WorkoutCreate,
            name=request.name,
            duration=request.duration,
            description=request.description or None,
            color=request.color or None,
        )

        async with self.ctx.session() as db:
            workout = await WorkoutRepository(db).create_workout(Workout(**data.model_dump()))
            return pb2.CreateWorkoutResponse(workout=workout_to_message(workout))

    @handle_service_errors
    async def GetWorkout(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        workout_id = parse_id(request.workout_id, "workout_id")

        async with self.ctx.session() as db:
            workout = await WorkoutRepository(db).get_by_id(workout_id)
            if not workout:
                raise NotFound("Workout")
            return pb2.GetWorkoutResponse(workout=workout_to_message(workout))

    @handle_service_errors
    async def UpdateWorkout(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        workout_id = parse_id(request.workout_id, "workout_id")
        changes = validate_request(
            WorkoutUpdate, **sparse_fields(request, "name", "duration", "description", "color")
        ).model_dump(exclude_unset=True)

        async with self.ctx.session() as db:
            repo = WorkoutRepository(db)
            workout = await repo.get_by_id(workout_id)
            if not workout:
                raise NotFound("Workout")
            workout = await repo.update_workout(workout, changes)
            return pb2.UpdateWorkoutResponse(workout=workout_to_message(workout))

    @handle_service_errors
    async def DeleteWorkout(self, request, context):
        get_current_session(self.ctx.auth, request, context)
        workout_id = parse_id(request.workout_id, "workout_id")

        async with self.ctx.session() as db:
            repo = WorkoutRepository(db)
            workout = await repo.get_by_id(workout_id)
            if not workout:
                raise NotFound("Workout")
            await repo.delete_workout(workout)
            return pb2.DeleteWorkoutResponse(success=True)
