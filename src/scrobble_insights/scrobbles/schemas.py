"""Pydantic response models for scrobble browsing."""

from pydantic import BaseModel

from scrobble_insights.events import PlayEvent


class ScrobblePage(BaseModel):
    """One page of scrobbles, newest first."""

    total: int
    limit: int
    offset: int
    items: list[PlayEvent]


class AvailableYears(BaseModel):
    years: list[int]
