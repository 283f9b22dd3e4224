from gym_registration.models.trainee import Trainee
from gym_registration.models.workout import Workout
from gym_registration.models.routine import Routine
from gym_registration.models.registration import Registration

__all__ = [
    "Trainee",
    "Workout",
    "Routine",
    "Registration",
]
