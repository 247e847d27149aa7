from kivymd.app import MDApp
from kivy.lang import Builder
from pathlib import Path
import logging
import os
import sys

from kivy.core.window import Window

import core
from core import DaySchedule, load_training_plans, get_active_plan, DEFAULT_CATALOG_PATH
from backend import settings

# Register screen classes before the kv file references them
from ui.screens import ExerciseSessionScreen, ScheduleScreen  # noqa: F401


if os.name == "nt" or sys.platform.startswith("win"):
    Window.size = (280, 280 * (20 / 9))


class FitRecordApp(MDApp):
    schedule: DaySchedule | None = None

    def build(self):
        self.schedule = self.load_schedule()
        return Builder.load_file(str(Path(__file__).with_name("main.kv")))

    def load_schedule(self, catalog_path: Path = DEFAULT_CATALOG_PATH) -> DaySchedule | None:
        """Create the :class:`DaySchedule` for the active plan in the catalog."""

        try:
            plans = load_training_plans(catalog_path)
        except (OSError, core.CatalogError):
            logging.exception("Could not load training plans from %s", catalog_path)
            return None
        plan = get_active_plan(plans)
        if plan is None:
            logging.warning("Catalog %s contains no plans", catalog_path)
            return None
        return DaySchedule(
            plan,
            default_rest_seconds=int(
                settings.get_value("default_rest_seconds", core.DEFAULT_REST_SECONDS)
            ),
        )

    def on_stop(self):
        # no rest timer may outlive the app
        if self.schedule:
            self.schedule.close_exercise()


if __name__ == "__main__":
    FitRecordApp().run()
