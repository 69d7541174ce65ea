"""Parse console lines into validated patients."""

from __future__ import annotations

from pydantic import ValidationError

from intake.models import PatientEntry
from sim.entities import Patient

ENTRY_FIELDS = ("id", "gender", "arrival_time", "category")
ENTRY_FORMAT = "ID Gender(M/F) ArrivalTime(HH:MM) Type(Urgent/Normal)"


class EntryError(ValueError):
    """Raised when a manual entry line cannot be turned into a patient."""


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def parse_entry(line: str, tick: int) -> Patient:
    """Split a whitespace-separated record and admit it at `tick`."""
    tokens = line.split()
    if len(tokens) != len(ENTRY_FIELDS):
        raise EntryError(
            f"expected {len(ENTRY_FIELDS)} fields ({ENTRY_FORMAT}), got {len(tokens)}"
        )
    try:
        entry = PatientEntry.model_validate(dict(zip(ENTRY_FIELDS, tokens)))
    except ValidationError as e:
        raise EntryError(_describe(e)) from e
    return entry.to_patient(tick)
