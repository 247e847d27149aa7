"""UI screen modules for FitRecord."""

from .exercise_session_screen import ExerciseSessionScreen
from .schedule_screen import ScheduleScreen

__all__ = [
    "ExerciseSessionScreen",
    "ScheduleScreen",
]
