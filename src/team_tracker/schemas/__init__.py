"""Request and response models for the HTTP API."""

from typing import Annotated

from pydantic import Field

# Largest id a signed 64-bit INTEGER column can hold.
MAX_ID = 2**63 - 1

EntityId = Annotated[int, Field(ge=1, le=MAX_ID)]

__all__ = ["EntityId", "MAX_ID"]
