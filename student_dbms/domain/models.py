"""
Domain models for the Student DBMS.

Defines the single record type held by the in-memory table. Identifiers are
handed out by `StudentTable`; the model only validates and renders them.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StudentRecord(BaseModel):
    """
    Representation of a single row in the student table.
    """

    id: int = Field(..., ge=1, description="Table-assigned identifier, never reused.")
    name: str = Field(..., description="Student name; not unique.")
    course: str = Field("", description="Free-form course name.")
    score: int = Field(..., description="Marks obtained.")
    city: str = Field("", description="Free-form city name.")

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def __str__(self) -> str:
        return (
            f"ID: {self.id} | Name: {self.name} | Course: {self.course} "
            f"| Marks: {self.score} | City: {self.city}"
        )


__all__ = ["StudentRecord"]
