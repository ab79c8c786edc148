"""Value types returned by the address layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WitnessAddress(BaseModel):
    """A decoded witness address: prefix, version and program."""

    model_config = ConfigDict(frozen=True)

    hrp: str = Field(..., min_length=1)
    version: int = Field(..., ge=0, le=16)
    program: bytes
