"""Diffing of form values against their initial state."""

from typing import Any, Mapping, Optional


def get_changed_fields(form_value: Mapping[str, Any], initial_form: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Return only the entries of ``form_value`` that differ from ``initial_form``.

    Without an initial form every entry counts as changed.
    """

    if initial_form is None:
        return dict(form_value)
    return {key: value for key, value in form_value.items() if initial_form.get(key) != value}
