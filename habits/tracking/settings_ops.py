"""Pure transformations of HabitSettings.

Every function returns a new HabitSettings and leaves its argument untouched.
Updating or deleting an id that does not exist returns the settings unchanged.
"""

from dataclasses import replace
from typing import Any

from .models import CustomCheckbox, CustomField, Goal, HabitSettings, Tag


def update_settings(settings: HabitSettings, **changes: Any) -> HabitSettings:
    """Replace top-level fields, e.g. update_settings(s, reminder_time="21:00")."""
    return replace(settings, **changes)


def add_tag(settings: HabitSettings, tag: Tag) -> HabitSettings:
    return replace(settings, tags=settings.tags + (tag,))


def update_tag(settings: HabitSettings, tag_id: str, **updates: Any) -> HabitSettings:
    return replace(settings, tags=_update_by_id(settings.tags, tag_id, updates))


def delete_tag(settings: HabitSettings, tag_id: str) -> HabitSettings:
    return replace(settings, tags=tuple(t for t in settings.tags if t.id != tag_id))


def add_custom_checkbox(settings: HabitSettings, checkbox: CustomCheckbox) -> HabitSettings:
    return replace(settings, custom_checkboxes=settings.custom_checkboxes + (checkbox,))


def update_custom_checkbox(
    settings: HabitSettings, checkbox_id: str, **updates: Any
) -> HabitSettings:
    return replace(
        settings,
        custom_checkboxes=_update_by_id(settings.custom_checkboxes, checkbox_id, updates),
    )


def delete_custom_checkbox(settings: HabitSettings, checkbox_id: str) -> HabitSettings:
    return replace(
        settings,
        custom_checkboxes=tuple(
            cb for cb in settings.custom_checkboxes if cb.id != checkbox_id
        ),
    )


def add_goal(settings: HabitSettings, goal: Goal) -> HabitSettings:
    return replace(settings, goals=settings.goals + (goal,))


def update_goal(settings: HabitSettings, goal_id: str, **updates: Any) -> HabitSettings:
    return replace(settings, goals=_update_by_id(settings.goals, goal_id, updates))


def delete_goal(settings: HabitSettings, goal_id: str) -> HabitSettings:
    return replace(settings, goals=tuple(g for g in settings.goals if g.id != goal_id))


def enabled_checkboxes(settings: HabitSettings) -> list[CustomCheckbox]:
    """Checkboxes that take part in daily tracking."""
    return [cb for cb in settings.custom_checkboxes if cb.enabled]


def unknown_goal_fields(settings: HabitSettings) -> list[Goal]:
    """
    Goals pointing at a custom checkbox id that does not exist.

    Such goals always count 0; this lets callers surface the misconfiguration.
    """
    checkbox_ids = {cb.id for cb in settings.custom_checkboxes}
    return [
        goal
        for goal in settings.goals
        if isinstance(goal.field, CustomField)
        and goal.field.checkbox_id not in checkbox_ids
    ]


def _update_by_id(items: tuple, item_id: str, updates: dict[str, Any]) -> tuple:
    # The id itself is never rewritten
    updates = {k: v for k, v in updates.items() if k != "id"}
    return tuple(
        replace(item, **updates) if item.id == item_id else item for item in items
    )
