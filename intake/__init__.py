"""Manual patient entry: validation model and line parser."""

from intake.models import PatientEntry
from intake.parser import EntryError, parse_entry

__all__ = [
    "PatientEntry",
    "EntryError",
    "parse_entry",
]
