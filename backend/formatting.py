"""Text shown by the session and schedule screens."""

from __future__ import annotations

from backend.prescription import SetGroup, SetGroupType, SetSpec

_SET_TYPE_LABELS = {
    SetGroupType.NORMAL: "Normal",
    SetGroupType.DROP_SET: "Drop set",
    SetGroupType.PYRAMID_UP: "Pyramid up",
    SetGroupType.PYRAMID_DOWN: "Pyramid down",
    SetGroupType.PYRAMID_FULL: "Full pyramid",
    SetGroupType.SUPER_SET: "Super set",
    SetGroupType.GIANT_SET: "Giant set",
}

_SET_TYPE_DESCRIPTIONS = {
    SetGroupType.NORMAL: "Regular sets with the same weight and reps.",
    SetGroupType.DROP_SET: "Lower the weight after each set and keep going.",
    SetGroupType.PYRAMID_UP: "Increase the weight and reduce the reps each set.",
    SetGroupType.PYRAMID_DOWN: "Reduce the weight and increase the reps each set.",
    SetGroupType.PYRAMID_FULL: "Increase the weight first, then bring it back down.",
    SetGroupType.SUPER_SET: "Two different movements back to back.",
    SetGroupType.GIANT_SET: "Three or more movements back to back.",
}

_STATUS_LABELS = {
    "not_started": "Not started",
    "in_progress": "In progress",
    "completed": "Completed",
}

WEEKDAY_SHORT_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# rest at or below this many seconds is shown as nearly over
REST_ENDING_SECONDS = 10
REST_COLOR = (1, 0, 0, 1)
REST_ENDING_COLOR = (0, 1, 0, 1)


def format_rest_time(seconds: int) -> str:
    """Return ``seconds`` as ``m:ss``."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def rest_timer_color(seconds: int) -> tuple:
    """Red while resting, green once the rest is about to end."""
    return REST_ENDING_COLOR if seconds <= REST_ENDING_SECONDS else REST_COLOR


def set_type_label(set_type: SetGroupType | str) -> str:
    return _SET_TYPE_LABELS.get(SetGroupType(set_type), str(set_type))


def set_type_description(set_type: SetGroupType | str) -> str:
    return _SET_TYPE_DESCRIPTIONS.get(SetGroupType(set_type), "Custom set group.")


def _number(value: float) -> str:
    return f"{value:g}"


def describe_set(spec: SetSpec) -> str:
    """Return e.g. ``"10 reps @ 60 kg, RPE 8"``."""

    text = f"{spec.reps} reps"
    if spec.weight:
        text += f" @ {_number(spec.weight)} kg"
    if spec.rpe is not None:
        text += f", RPE {_number(spec.rpe)}"
    return text


def set_position_label(set_index: int, group: SetGroup) -> str:
    """Return ``"Set 2 / 3"`` for the second of three sets."""
    return f"Set {set_index + 1} / {len(group.sets)}"


def status_label(status) -> str:
    value = getattr(status, "value", status)
    return _STATUS_LABELS.get(value, str(value))
