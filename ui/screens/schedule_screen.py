from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.uix.dialog import MDDialog
from kivymd.uix.button import MDFlatButton
from kivymd.uix.list import TwoLineListItem
from kivymd.toast import toast
from kivy.properties import BooleanProperty, ListProperty, ObjectProperty, StringProperty

from backend.formatting import WEEKDAY_SHORT_NAMES, status_label


class ScheduleScreen(MDScreen):
    """Week selector and the exercises planned for the selected day."""

    plan_name = StringProperty("")
    day_name = StringProperty("")
    day_kind = StringProperty("")
    progress_text = StringProperty("")
    week_labels = ListProperty([])
    is_rest_day = BooleanProperty(False)
    exercise_list = ObjectProperty(None)

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self):
        app = MDApp.get_running_app()
        schedule = getattr(app, "schedule", None) if app else None
        if not schedule:
            return
        day = schedule.selected_day
        self.plan_name = schedule.plan.name
        self.day_name = day.name
        self.is_rest_day = day.is_rest_day
        self.day_kind = "Rest day" if day.is_rest_day else "Training day"
        self.week_labels = [
            f"{name}\n{d.day}"
            for name, d in zip(WEEKDAY_SHORT_NAMES, schedule.week_dates())
        ]
        summary = schedule.summary()
        self.progress_text = (
            f"{summary.completed_exercises}/{summary.total_exercises} exercises, "
            f"{summary.completed_sets}/{summary.total_sets} sets"
        )
        if not self.exercise_list:
            return
        self.exercise_list.clear_widgets()
        if not day.exercises:
            message = (
                "Rest day, let your body recover"
                if day.is_rest_day
                else "No training planned for today"
            )
            self.exercise_list.add_widget(
                TwoLineListItem(text="Nothing scheduled", secondary_text=message)
            )
            return
        for exercise in day.exercises:
            status = status_label(schedule.status_of(exercise.id))
            item = TwoLineListItem(
                text=exercise.name,
                secondary_text=f"{exercise.total_sets} sets - {status}",
            )
            item.bind(on_release=lambda _item, ex_id=exercise.id: self.open_exercise(ex_id))
            self.exercise_list.add_widget(item)

    def select_day(self, index: int):
        app = MDApp.get_running_app()
        app.schedule.select_day(index)
        self.populate()

    def open_exercise(self, exercise_id: str):
        app = MDApp.get_running_app()
        app.schedule.open_exercise(exercise_id)
        if self.manager:
            self.manager.current = "exercise_session"

    def continue_training(self):
        app = MDApp.get_running_app()
        if app.schedule.continue_training() is None:
            toast("Every exercise is done for today")
            return
        if self.manager:
            self.manager.current = "exercise_session"

    def confirm_restart(self):
        dialog = None

        def do_restart(*_args):
            app = MDApp.get_running_app()
            if app and app.schedule:
                app.schedule.restart_day()
            self.populate()
            if dialog:
                dialog.dismiss()

        dialog = MDDialog(
            title="Restart Day?",
            text="All progress for this day will be cleared.",
            buttons=[
                MDFlatButton(text="Cancel", on_release=lambda *_: dialog.dismiss()),
                MDFlatButton(text="Restart", on_release=do_restart),
            ],
        )
        dialog.open()
