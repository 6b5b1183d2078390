# User-facing texts. Never put exception text in these.
SIGN_IN_REQUIRED = "Please sign in to continue"
INVALID_INPUT = "Some fields are invalid"
DUPLICATE_EXERCISE = "An exercise with the same name already exists"
UNKNOWN_EXERCISE = "Unknown exercise"
EXERCISE_CREATE_FAILED = "Could not create the exercise"
WORKOUT_SAVE_FAILED = "Could not save the workout"
