from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ComplexityLevel(str, Enum):
    SIMPLE = "Simple"
    MODERATE = "Moderate"
    ADVANCED = "Advanced"


class BusinessContext(CamelModel):
    """The business a set of ideas is generated for."""

    model_config = ConfigDict(str_strip_whitespace=True)

    prod_description: str = Field(min_length=1)
    target_audience: str = Field(min_length=1)
    location: str | None = None
    business_url: str | None = None

    @field_validator("location")
    @classmethod
    def empty_location_is_none(cls, v: str | None) -> str | None:
        return v or None


class IdeaDraft(CamelModel):
    """Content of a single lead magnet idea, as generated or revised by the model."""

    name: str = "Untitled idea"
    summary: str
    detailed_description: str
    why_this: str
    complexity_level: str = ComplexityLevel.SIMPLE.value


class MagnetSpec(CamelModel):
    """Artifacts produced by the spec prompt for one idea iteration."""

    magnet_spec: str
    creation_prompt: str


class BusinessProfileSuggestion(CamelModel):
    """Profile inferred from a business homepage."""

    prod_description: str
    target_audience: str
    confidence: int | None = Field(default=None, ge=1, le=10)
    website: str | None = None
