from __future__ import annotations
from pathlib import PurePath
from typing import List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

Cell = Union[str, int, float]
Row = List[Cell]


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    columns: List[str]
    # Cells are checked by the table engine, not here; row arity is the caller's contract.
    data: List[list] = Field(default_factory=list)


class ReportRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    subtitle: str = ""
    sections: List[Section] = Field(default_factory=list)
    file_name: str = Field(alias="fileName")

    @field_validator("file_name")
    @classmethod
    def bare_file_name(cls, v: str) -> str:
        v = (v or "").strip()
        if not v or v in (".", ".."):
            raise ValueError("file_name must not be empty")
        if PurePath(v).name != v or "\\" in v:
            raise ValueError("file_name must not contain directory parts")
        return v
