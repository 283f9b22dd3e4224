"""
Асинхронный клиент сервиса поверх сгенерированных заглушек.

Пример:
    async with GymRegistrationClient("localhost:50051") as client:
        await client.create_trainee("A", "a@x.com", "pw", "UTC")
        session = await client.create_session("a@x.com", "pw")
        trainees = await client.list_trainees(session.token, page=1, page_size=5)
"""

from datetime import datetime
from typing import Iterable, Optional

import grpc

from gym_registration.api.mappers import datetime_to_timestamp
from gym_registration.api.protos import gym_registration_pb2 as pb2, gym_registration_pb2_grpc as pb2_grpc


class GymRegistrationClient:
    def __init__(self, target: str, channel: Optional[grpc.aio.Channel] = None):
        self.target = target
        self._channel = channel
        self._owns_channel = channel is None

    async def __aenter__(self) -> "GymRegistrationClient":
        if self._channel is None:
            self._channel = grpc.aio.insecure_channel(self.target)
        self.sessions = pb2_grpc.SessionServiceStub(self._channel)
        self.trainees = pb2_grpc.TraineeServiceStub(self._channel)
        self.workouts = pb2_grpc.WorkoutServiceStub(self._channel)
        self.routines = pb2_grpc.RoutineServiceStub(self._channel)
        self.registrations = pb2_grpc.RegistrationServiceStub(self._channel)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._channel is not None and self._owns_channel:
            await self._channel.close()
        self._channel = None

    # ==========================
    # SESSION
    # ==========================

    async def create_session(self, email: str, password: str):
        return await self.sessions.CreateSession(pb2.CreateSessionRequest(email=email, password=password))

    async def delete_session(self, token: str):
        return await self.sessions.DeleteSession(pb2.DeleteSessionRequest(token=token))

    async def check_session(self, token: str):
        return await self.sessions.CheckSession(pb2.CheckSessionRequest(token=token))

    # ==========================
    # TRAINEE
    # ==========================

    async def list_trainees(self, token: str, page: int = 0, page_size: int = 0):
        return await self.trainees.ListTrainees(pb2.ListTraineesRequest(
            token=token,
            pagination=pb2.PaginationRequest(page=page, page_size=page_size),
        ))

    async def create_trainee(self, name: str, email: str, password: str, timezone: str = ""):
        response = await self.trainees.CreateTrainee(pb2.CreateTraineeRequest(
            name=name, email=email, password=password, timezone=timezone,
        ))
        return response.trainee

    async def get_trainee(self, token: str, trainee_id: str):
        response = await self.trainees.GetTrainee(pb2.GetTraineeRequest(token=token, trainee_id=trainee_id))
        return response.trainee

    async def update_trainee(self, token: str, trainee_id: str, **fields):
        response = await self.trainees.UpdateTrainee(
            pb2.UpdateTraineeRequest(token=token, trainee_id=trainee_id, **fields)
        )
        return response.trainee

    async def delete_trainee(self, token: str, trainee_id: str) -> bool:
        response = await self.trainees.DeleteTrainee(pb2.DeleteTraineeRequest(token=token, trainee_id=trainee_id))
        return response.success

    # ==========================
    # WORKOUT
    # ==========================

    async def list_workouts(self, token: str):
        response = await self.workouts.ListWorkouts(pb2.ListWorkoutsRequest(token=token))
        return list(response.workouts)

    async def create_workout(self, token: str, name: str, duration: int, description: str = "", color: str = ""):
        response = await self.workouts.CreateWorkout(pb2.CreateWorkoutRequest(
            token=token, name=name, duration=duration, description=description, color=color,
        ))
        return response.workout

    async def get_workout(self, token: str, workout_id: str):
        response = await self.workouts.GetWorkout(pb2.GetWorkoutRequest(token=token, workout_id=workout_id))
        return response.workout

    async def update_workout(self, token: str, workout_id: str, **fields):
        response = await self.workouts.UpdateWorkout(
            pb2.UpdateWorkoutRequest(token=token, workout_id=workout_id, **fields)
        )
        return response.workout

    async def delete_workout(self, token: str, workout_id: str) -> bool:
        response = await self.workouts.DeleteWorkout(pb2.DeleteWorkoutRequest(token=token, workout_id=workout_id))
        return response.success

    # ==========================
    # ROUTINE
    # ==========================

    @staticmethod
    def _time_slots(availability: Iterable[dict]):
        return [pb2.TimeSlot(**slot) for slot in availability]

    async def list_routines(self, token: str, trainee_id: Optional[str] = None):
        request = pb2.ListRoutinesRequest(token=token)
        if trainee_id is not None:
            request.trainee_id = trainee_id
        response = await self.routines.ListRoutines(request)
        return list(response.routines)

    async def create_routine(self, token: str, user_id: str, availability: Iterable[dict]):
        response = await self.routines.CreateRoutine(pb2.CreateRoutineRequest(
            token=token, user_id=user_id, availability=self._time_slots(availability),
        ))
        return response.routine

    async def get_trainee_routine(self, token: str, trainee_id: str):
        response = await self.routines.GetTraineeRoutine(
            pb2.GetTraineeRoutineRequest(token=token, trainee_id=trainee_id)
        )
        return response.routine

    async def update_trainee_routine(self, token: str, trainee_id: str, availability: Iterable[dict]):
        response = await self.routines.UpdateTraineeRoutine(pb2.UpdateTraineeRoutineRequest(
            token=token, trainee_id=trainee_id, availability=self._time_slots(availability),
        ))
        return response.routine

    async def delete_trainee_routine(self, token: str, trainee_id: str) -> bool:
        response = await self.routines.DeleteTraineeRoutine(
            pb2.DeleteTraineeRoutineRequest(token=token, trainee_id=trainee_id)
        )
        return response.success

    # ==========================
    # REGISTRATION
    # ==========================

    async def list_registrations(self, token: str):
        response = await self.registrations.ListRegistrations(pb2.ListRegistrationsRequest(token=token))
        return list(response.registrations)

    async def create_registration(
        self,
        token: str,
        event_id: str,
        user_id: str,
        invitee_email: str,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        status: str = "",
    ):
        request = pb2.CreateRegistrationRequest(
            token=token,
            event_id=event_id,
            user_id=user_id,
            invitee_email=invitee_email,
            status=status,
        )
        request.start_time.CopyFrom(datetime_to_timestamp(start_time))
        if end_time is not None:
            request.end_time.CopyFrom(datetime_to_timestamp(end_time))
        response = await self.registrations.CreateRegistration(request)
        return response.registration

    async def get_registration(self, token: str, registration_id: str):
        response = await self.registrations.GetRegistration(
            pb2.GetRegistrationRequest(token=token, registration_id=registration_id)
        )
        return response.registration

    async def update_registration(self, token: str, registration_id: str, **fields):
        request = pb2.UpdateRegistrationRequest(token=token, registration_id=registration_id)
        for name, value in fields.items():
            if isinstance(value, datetime):
                getattr(request, name).CopyFrom(datetime_to_timestamp(value))
            else:
                setattr(request, name, value)
        response = await self.registrations.UpdateRegistration(request)
        return response.registration

    async def delete_registration(self, token: str, registration_id: str) -> bool:
        response = await self.registrations.DeleteRegistration(
            pb2.DeleteRegistrationRequest(token=token, registration_id=registration_id)
        )
        return response.success
