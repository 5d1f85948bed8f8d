from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

_WHITESPACE_RE = re.compile(r"\s+")

MIN_QUERY_LENGTH = 2


class SearchInput(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def normalise_query(cls, v: str) -> str:
        v = _WHITESPACE_RE.sub(" ", v).strip()
        if len(v) < MIN_QUERY_LENGTH:
            raise ValueError(f"query must be at least {MIN_QUERY_LENGTH} characters")
        if len(v) > 500:
            raise ValueError("query must not exceed 500 characters")
        return v


class TimestampsInput(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("url must not be empty")
        if len(v) > 2048:
            raise ValueError("url must not exceed 2048 characters")
        return v


class TimestampsOutput(BaseModel):
    url: str
    title: str
    timestamps: list[str]


class HealthOutput(BaseModel):
    status: str = "ok"
