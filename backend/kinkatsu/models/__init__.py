from kinkatsu.models.user import User
from kinkatsu.models.exercise import BodyPart, Exercise
from kinkatsu.models.workout import Workout, WorkoutItem, WorkoutSet

__all__ = ["User", "BodyPart", "Exercise", "Workout", "WorkoutItem", "WorkoutSet"]
