from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AllocationResult(BaseModel):
    """Split of a requested quantity under a buy/get promotion."""
    model_config = ConfigDict(frozen=True)

    normal_units: int = Field(ge=0, description="Units charged at full price")
    eligible_free_units: int = Field(ge=0, description="Free units earned before stock limiting")
    honored_free_units: int = Field(ge=0, description="Free units the promotional stock can cover")

    @property
    def shortfall(self) -> int:
        return self.eligible_free_units - self.honored_free_units
