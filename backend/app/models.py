from datetime import datetime, timezone

from pydantic import EmailStr, field_validator
from pydantic import Field as PydanticField
from sqlalchemy import DateTime, Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from app.agent.artifacts import BusinessContext, CamelModel, ComplexityLevel, IdeaDraft
from app.validators import validate_business_url


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


# Database models

class MagnetRequestBase(SQLModel):
    prod_description: str = Field(sa_type=Text)
    target_audience: str = Field(sa_type=Text)
    location: str | None = Field(default=None, max_length=255)
    business_url: str = Field(max_length=2048)


class MagnetRequestCreate(MagnetRequestBase):
    pass


class MagnetRequest(MagnetRequestBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    public_id: str = Field(unique=True, index=True, max_length=64)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    ideas: list["Idea"] = Relationship(
        back_populates="magnet_request",
        cascade_delete=True,
        sa_relationship_kwargs={"order_by": "Idea.result_idea_id"},
    )


# Shared content of an idea and each of its iterations
class IdeaContent(SQLModel):
    name: str = Field(max_length=255)
    summary: str = Field(sa_type=Text)
    detailed_description: str = Field(sa_type=Text)
    why_this: str = Field(sa_type=Text)
    complexity_level: str = Field(default=ComplexityLevel.SIMPLE.value, max_length=20)


class Idea(IdeaContent, table=True):
    __table_args__ = (UniqueConstraint("magnet_request_id", "result_idea_id"),)

    id: int | None = Field(default=None, primary_key=True)
    magnet_request_id: int = Field(
        foreign_key="magnetrequest.id", nullable=False, ondelete="CASCADE", index=True
    )
    result_idea_id: int = Field(ge=1)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    magnet_request: MagnetRequest | None = Relationship(back_populates="ideas")
    iterations: list["IdeaIteration"] = Relationship(
        back_populates="idea",
        cascade_delete=True,
        sa_relationship_kwargs={"order_by": "IdeaIteration.version.desc()"},
    )


class IdeaIteration(IdeaContent, table=True):
    __table_args__ = (UniqueConstraint("idea_id", "version"),)

    id: int | None = Field(default=None, primary_key=True)
    idea_id: int = Field(
        foreign_key="idea.id", nullable=False, ondelete="CASCADE", index=True
    )
    version: int = Field(default=0, ge=0)
    magnet_spec: str | None = Field(default=None, sa_type=Text)
    creation_prompt: str | None = Field(default=None, sa_type=Text)
    feedback_provided: str | None = Field(default=None, sa_type=Text)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    idea: Idea | None = Relationship(back_populates="iterations")


class IdeaFeedback(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    idea_iteration_id: int = Field(
        foreign_key="ideaiteration.id", nullable=False, ondelete="CASCADE", index=True
    )
    feedback_rating: int = Field(ge=1, le=3)  # 1 = not useful, 2 = ok, 3 = great
    feedback_comments: str | None = Field(default=None, sa_type=Text)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class HelpRequest(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    idea_id: int | None = Field(default=None, foreign_key="idea.id", ondelete="SET NULL")
    idea_iteration_id: int | None = Field(
        default=None, foreign_key="ideaiteration.id", ondelete="SET NULL"
    )
    email: str = Field(max_length=255)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


# API shapes. The client speaks camelCase; either spelling is accepted on input.

class GenerateIdeasRequest(BusinessContext):
    business_url: str

    @field_validator("business_url")
    @classmethod
    def check_business_url(cls, v: str) -> str:
        return validate_business_url(v)


class MagnetRequestPublic(CamelModel):
    id: int
    public_id: str
    prod_description: str
    target_audience: str
    location: str | None = None
    business_url: str
    created_at: datetime | None = None


class IdeaIterationPublic(CamelModel):
    id: int
    idea_id: int
    version: int
    name: str
    summary: str
    detailed_description: str
    why_this: str
    complexity_level: str
    magnet_spec: str | None = None
    creation_prompt: str | None = None
    feedback_provided: str | None = None
    created_at: datetime | None = None


class IdeaPublic(CamelModel):
    id: int
    magnet_request_id: int
    result_idea_id: int
    name: str
    summary: str
    detailed_description: str
    why_this: str
    complexity_level: str
    created_at: datetime | None = None
    # Newest first; iterations[0] is the current version.
    iterations: list[IdeaIterationPublic] = []


class MagnetRequestWithIdeas(MagnetRequestPublic):
    ideas: list[IdeaPublic] = []


class IdeaWithRequest(IdeaPublic):
    magnet_request: MagnetRequestPublic


class IdeaIterationWithIdea(IdeaIterationPublic):
    idea: IdeaWithRequest


class IterationMetadata(CamelModel):
    id: int
    version: int
    feedback_provided: str | None = None
    has_magnet_spec: bool = False
    has_creation_prompt: bool = False
    created_at: datetime | None = None


class IdeaWithMetadata(CamelModel):
    idea: IdeaWithRequest
    iteration_metadata: list[IterationMetadata]


class IterationResponse(CamelModel):
    iteration: IdeaIterationWithIdea


class GeneratedIdea(CamelModel):
    id: int
    result_idea_id: int
    name: str
    summary: str
    detailed_description: str
    why_this: str
    complexity_level: str


class GenerateIdeasResponse(CamelModel):
    ideas: list[GeneratedIdea]
    magnet_request_id: int
    public_id: str


class GenerateSpecRequest(CamelModel):
    idea: IdeaDraft
    business_data: BusinessContext
    iteration_id: int | None = None


class IterateIdeaRequest(CamelModel):
    idea_id: int
    user_feedback: str
    current_idea_content: IdeaDraft | None = None

    @field_validator("user_feedback")
    @classmethod
    def feedback_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("User feedback is required")
        return v.strip()


class IterateIdeaResponse(CamelModel):
    success: bool = True
    idea: IdeaIterationWithIdea


class IdeaFeedbackCreate(CamelModel):
    idea_iteration_id: int
    feedback_rating: int = PydanticField(ge=1, le=3)
    feedback_comments: str | None = None


class IdeaFeedbackPublic(IdeaFeedbackCreate):
    id: int
    created_at: datetime | None = None


class FeedbackResponse(CamelModel):
    success: bool = True
    feedback: IdeaFeedbackPublic


class HelpRequestCreate(CamelModel):
    idea_id: int | None = None
    idea_iteration_id: int | None = None
    email: EmailStr


class HelpRequestPublic(CamelModel):
    id: int
    idea_id: int | None = None
    idea_iteration_id: int | None = None
    email: str
    created_at: datetime | None = None


class HelpRequestResponse(CamelModel):
    success: bool = True
    help_request: HelpRequestPublic


class AutofillRequest(CamelModel):
    business_url: str

    @field_validator("business_url")
    @classmethod
    def check_business_url(cls, v: str) -> str:
        return validate_business_url(v)
