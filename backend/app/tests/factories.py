import json

from sqlmodel import Session

from app import crud
from app.agent.artifacts import IdeaDraft
from app.models import Idea, MagnetRequest, MagnetRequestCreate

BUSINESS = {
    "prodDescription": "Coaching for startups",
    "targetAudience": "early-stage founders",
    "businessUrl": "acme.com",
}


def idea_payload(i: int, **overrides) -> dict:
    payload = {
        "name": f"Idea {i}",
        "summary": f"Summary {i}",
        "detailedDescription": f"Detailed description {i}",
        "whyThis": f"Why this {i}",
        "complexityLevel": "Simple",
    }
    payload.update(overrides)
    return payload


def ideas_completion(count: int) -> str:
    return json.dumps({"ideas": [idea_payload(i) for i in range(1, count + 1)]})


def iteration_completion(name: str = "Sharper idea", **overrides) -> str:
    return json.dumps(idea_payload(0, name=name, **overrides))


def spec_completion(spec: str = "Spec v1", prompt: str = "Prompt v1") -> str:
    return json.dumps({"magnetSpec": spec, "creationPrompt": prompt})


def create_result_set(session: Session, count: int = 3) -> tuple[MagnetRequest, list[Idea]]:
    return crud.create_result_set(
        session=session,
        request_in=MagnetRequestCreate(
            prod_description="Coaching for startups",
            target_audience="early-stage founders",
            location="Berlin",
            business_url="https://www.acme.com",
        ),
        ideas=[
            IdeaDraft(
                name=f"Idea {i}",
                summary=f"Summary {i}",
                detailed_description=f"Detailed description {i}",
                why_this=f"Why this {i}",
                complexity_level="Simple",
            )
            for i in range(1, count + 1)
        ],
    )
