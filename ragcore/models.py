"""
Pydantic models shared across the core.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_VARIATIONS = 2
MAX_VARIATIONS = 5


class ExpanderConfig(BaseModel):
    """Immutable configuration for a query expander."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(default="llama2", description="Model identifier passed to the model runner")
    url: str = Field(default="http://localhost:11434", description="Model service URL")
    num_variations: int = Field(default=3, description="Number of query variations, clamped to 2-5")
    timeout: float = Field(default=120.0, gt=0, description="Model invocation timeout in seconds")

    @field_validator("num_variations", mode="after")
    @classmethod
    def clamp_num_variations(cls, value: int) -> int:
        """Out-of-range counts are clamped, never rejected."""
        return max(MIN_VARIATIONS, min(MAX_VARIATIONS, value))
