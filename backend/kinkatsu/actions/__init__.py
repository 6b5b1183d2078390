from kinkatsu.actions.exercise_actions import submit_exercise_create
from kinkatsu.actions.workout_actions import save_workout_payload, submit_workout_save

__all__ = ["submit_exercise_create", "submit_workout_save", "save_workout_payload"]
