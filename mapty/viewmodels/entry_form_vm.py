"""Entry form state for recording a travel log at a clicked map location.

Holds raw text exactly as typed; validation happens in
``TravelLogFactory`` when the controller submits the form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from mapty.domain.entities import Position, TravelMode

FORM_FIELDS: tuple[str, ...] = ("from", "to", "distance", "duration", "type")


def mode_options() -> List[str]:
    """Canonical mode names in selector order (``Walk`` ... ``Flight``)."""
    return [mode.title for mode in TravelMode]


@dataclass
class EntryFormVM:
    """Mutable form state; no I/O here."""

    visible: bool = False
    pending: Optional[Position] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.reset_fields()

    def reset_fields(self) -> None:
        # mutate in place: views bind inputs to this dict
        self.fields.clear()
        self.fields.update({name: "" for name in FORM_FIELDS})
        self.fields["type"] = TravelMode.WALK.title

    def set_field(self, name: str, value: Any) -> None:
        if name not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {name}")
        self.fields[name] = "" if value is None else str(value)

    def get(self, name: str) -> str:
        return self.fields.get(name, "")

    def open_at(self, position: Position) -> None:
        self.pending = position
        self.visible = True

    def hide(self) -> None:
        """Hide the form and clear every input (after submit or cancel)."""
        self.visible = False
        self.pending = None
        self.reset_fields()

    def clear_numbers(self) -> None:
        self.fields["distance"] = ""
        self.fields["duration"] = ""


__all__ = ["EntryFormVM", "FORM_FIELDS", "mode_options"]
