"""Pydantic model for a manually entered patient record."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from sim.entities import Category, Gender, Patient


class PatientEntry(BaseModel):
    """
    One `ID GENDER TIME CATEGORY` record. Use model_validate(dict) to check
    raw fields; use to_patient(tick) to admit it at the current tick.
    """

    id: str = Field(min_length=1)
    gender: Gender
    arrival_time: str = Field(pattern=r"^([01]?\d|2[0-3]):[0-5]\d$")
    category: Category

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        if isinstance(v, str):
            return Category.parse(v)
        return v

    def to_patient(self, tick: int) -> Patient:
        return Patient(
            id=self.id,
            gender=self.gender,
            arrival_time_label=self.arrival_time,
            category=self.category,
            arrival_tick=tick,
        )
