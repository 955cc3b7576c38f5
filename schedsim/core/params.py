"""Validated start parameters for a simulation run."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..scheduling.policies import Algorithm


class SimulationParams(BaseModel):
    """Parameters accepted by ``SchedulerEngine.start``.

    Field aliases match the HTTP body (``processCount``, ``speed``).
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    process_count: int = Field(10, ge=1, le=20, alias="processCount")
    algorithm: Algorithm = Algorithm.AI_BOOST
    speed_multiplier: float = Field(1.0, ge=0.1, le=5.0, alias="speed")

    @field_validator('algorithm', mode='before')
    @classmethod
    def resolve_algorithm(cls, value):
        return Algorithm.from_name(value)
