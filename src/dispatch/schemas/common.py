"""Shared API schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate


class CoordinateModel(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
