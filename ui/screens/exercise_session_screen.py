from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.uix.dialog import MDDialog
from kivymd.uix.button import MDFlatButton
from kivymd.uix.list import OneLineListItem, TwoLineListItem
from kivy.clock import Clock
from kivy.properties import (
    BooleanProperty,
    ListProperty,
    NumericProperty,
    ObjectProperty,
    StringProperty,
)

from backend.formatting import (
    describe_set,
    format_rest_time,
    rest_timer_color,
    set_position_label,
    set_type_description,
    set_type_label,
)
from backend.session_state import Phase


class ExerciseSessionScreen(MDScreen):
    """Guides the trainee through the sets of one exercise.

    The rest countdown itself is driven by the session's own timer; this
    screen only polls the session to refresh its labels.
    """

    exercise_name = StringProperty("")
    group_label = StringProperty("")
    group_description = StringProperty("")
    set_label = StringProperty("")
    set_detail = StringProperty("")
    rest_label = StringProperty("")
    is_resting = BooleanProperty(False)
    is_completed = BooleanProperty(False)
    complete_disabled = BooleanProperty(True)
    rendered_version = NumericProperty(-1)
    timer_color = ListProperty([1, 0, 0, 1])
    set_list = ObjectProperty(None)
    _event = None

    def _session(self):
        app = MDApp.get_running_app()
        schedule = getattr(app, "schedule", None) if app else None
        return schedule.active_session if schedule else None

    def on_pre_enter(self, *args):
        app = MDApp.get_running_app()
        exercise = app.schedule.active_exercise if app else None
        self.exercise_name = exercise.name if exercise else ""
        self.rendered_version = -1
        self.refresh(0)
        self._ensure_clock_event()
        return super().on_pre_enter(*args)

    def on_leave(self, *args):
        if self._event:
            self._event.cancel()
            self._event = None
        return super().on_leave(*args)

    def _ensure_clock_event(self):
        if not self._event:
            self._event = Clock.schedule_interval(self.refresh, 0.2)

    def refresh(self, dt):
        session = self._session()
        if not session:
            return
        if session.version == self.rendered_version:
            return
        self.rendered_version = session.version
        self.is_resting = session.is_resting
        self.is_completed = session.phase is Phase.COMPLETED
        self.complete_disabled = not session.can_complete
        self.rest_label = (
            format_rest_time(session.rest_remaining_seconds) if self.is_resting else ""
        )
        self.timer_color = rest_timer_color(session.rest_remaining_seconds)
        group = session.current_group
        spec = session.current_set
        if group is not None and spec is not None:
            self.group_label = set_type_label(group.type)
            self.group_description = set_type_description(group.type)
            self.set_label = set_position_label(session.cursor[1], group)
            self.set_detail = describe_set(spec)
        else:
            self.group_label = "Training complete!"
            self.group_description = "Well done, every set is finished."
            self.set_label = ""
            self.set_detail = ""
        self.populate_sets(session)

    def populate_sets(self, session):
        if not self.set_list:
            return
        self.set_list.clear_widgets()
        completion = session.completion
        for group_index, group in enumerate(session.prescription.groups):
            self.set_list.add_widget(
                OneLineListItem(text=f"{group_index + 1}. {set_type_label(group.type)}")
            )
            for set_index, spec in enumerate(group.sets):
                mark = "[x]" if completion[group_index][set_index] else "[ ]"
                rest = (
                    f"rest {spec.rest_time_seconds}s"
                    if spec.rest_time_seconds
                    else "rest -"
                )
                self.set_list.add_widget(
                    TwoLineListItem(
                        text=f"{mark} Set {set_index + 1}: {describe_set(spec)}",
                        secondary_text=rest,
                    )
                )

    def complete_set(self):
        session = self._session()
        if not session:
            return
        # the version the user saw guards against double taps
        if session.complete_current_set(expected_version=int(self.rendered_version)):
            self.refresh(0)

    def show_close_confirmation(self):
        session = self._session()
        if not session or session.phase is Phase.COMPLETED or session.completed_sets == 0:
            self.close_session()
            return
        if not getattr(self, "_close_dialog", None):
            self._close_dialog = MDDialog(
                text="Leave this exercise? Completed sets are kept.",
                buttons=[
                    MDFlatButton(text="Cancel", on_release=lambda *_: self._close_dialog.dismiss()),
                    MDFlatButton(text="Leave", on_release=self._perform_close),
                ],
            )
        self._close_dialog.open()

    def _perform_close(self, *args):
        if getattr(self, "_close_dialog", None):
            self._close_dialog.dismiss()
        self.close_session()

    def close_session(self):
        app = MDApp.get_running_app()
        if app and app.schedule:
            app.schedule.close_exercise()
        self.rendered_version = -1
        if self.manager:
            self.manager.current = "schedule"
