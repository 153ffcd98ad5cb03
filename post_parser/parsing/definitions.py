from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormatSpec(BaseModel):
    """A tagged input descriptor: ``type`` selects the reader, ``type_spec``
    holds that reader's options and ``fields`` optionally renames the
    resulting columns."""

    model_config = ConfigDict(extra="forbid")

    type: str
    fields: List[str] = Field(default_factory=list)
    type_spec: Dict[str, Any] = Field(default_factory=dict)

    @property
    def tag(self) -> str:
        return self.type.lower()


class ReaderOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file: Optional[str] = None


def _single_char(value: str) -> str:
    if len(value) != 1 or value in ('"', "\r", "\n"):
        raise ValueError(f"expected a single character, got {value!r}")
    return value


class CsvOptions(ReaderOptions):
    header: bool = True
    delimiter: str = ","
    comment: Optional[str] = "#"

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, v: str) -> str:
        return _single_char(v)

    @field_validator("comment")
    @classmethod
    def _check_comment(cls, v: Optional[str]) -> Optional[str]:
        return _single_char(v) if v else None


class DatOptions(ReaderOptions):
    comment: Optional[str] = "#"

    @field_validator("comment")
    @classmethod
    def _check_comment(cls, v: Optional[str]) -> Optional[str]:
        return _single_char(v) if v else None


class TimeSeriesOptions(BaseModel):
    """Where a time series lives and how its step files are decoded."""

    model_config = ConfigDict(extra="forbid")

    file: str = Field(min_length=1)
    directory: str = Field(min_length=1)
    time_name: Optional[str] = None
    archive: Optional[str] = None
    format_spec: FormatSpec


class ArchiveOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file: str = Field(min_length=1)
    clear_after_read: bool = False
    format_spec: FormatSpec


class MultipleOptions(BaseModel):
    """Several inputs read one after the other and joined column-wise."""

    model_config = ConfigDict(extra="forbid")

    format_specs: List[FormatSpec] = Field(min_length=1)
