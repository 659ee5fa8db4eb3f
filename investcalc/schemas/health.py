"""Pydantic schema for the health-check endpoint."""

from typing import List

from pydantic import BaseModel


class HealthResponse(BaseModel):
    message: str
    indices: List[str]
