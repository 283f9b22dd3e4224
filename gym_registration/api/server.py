import grpc

from gym_registration.api.protos import gym_registration_pb2_grpc as pb2_grpc
from gym_registration.api.v1.registrations import RegistrationServicer
from gym_registration.api.v1.routines import RoutineServicer
from gym_registration.api.v1.sessions import SessionServicer
from gym_registration.api.v1.trainees import TraineeServicer
from gym_registration.api.v1.workouts import WorkoutServicer
from gym_registration.core.context import AppContext


def create_server(ctx: AppContext) -> grpc.aio.Server:
    """grpc.aio-сервер со всеми пятью сервисами, без привязки к порту."""
    server = grpc.aio.server()

    pb2_grpc.add_SessionServiceServicer_to_server(SessionServicer(ctx), server)
    pb2_grpc.add_TraineeServiceServicer_to_server(TraineeServicer(ctx), server)
    pb2_grpc.add_WorkoutServiceServicer_to_server(WorkoutServicer(ctx), server)
    pb2_grpc.add_RoutineServiceServicer_to_server(RoutineServicer(ctx), server)
    pb2_grpc.add_RegistrationServiceServicer_to_server(RegistrationServicer(ctx), server)

    return server
