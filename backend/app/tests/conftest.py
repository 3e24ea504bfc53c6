from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from app.api.deps import get_db, get_llm, get_mailer
from app.core.db import build_engine
from app.main import app


class FakeLLM:
    """Stands in for LLMClient; hands out queued completions in order."""

    model_name = "fake-model"

    def __init__(self) -> None:
        self.responses: list[str | Exception] = []
        self.calls: list[dict] = []

    def queue(self, *responses: str | Exception) -> None:
        self.responses.extend(responses)

    async def complete(
        self,
        prompt: str,
        *,
        prompt_name: str,
        response_format: str = "json_object",
        web_search: bool = False,
        model: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "prompt_name": prompt_name,
                "response_format": response_format,
                "web_search": web_search,
            }
        )
        if not self.responses:
            raise AssertionError(f"No completion queued for {prompt_name}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeMailer:
    enabled = True

    def __init__(self) -> None:
        self.sent: list[tuple[str, object]] = []
        self.error: Exception | None = None

    async def send_email(self, *, email_to: str, email) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append((email_to, email))
        return True


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def fake_mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def client(
    session: Session, fake_llm: FakeLLM, fake_mailer: FakeMailer
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: session
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_mailer] = lambda: fake_mailer
    # Not entered as a context manager, so the lifespan (real engine, real
    # OpenAI client) never runs.
    yield TestClient(app)
    app.dependency_overrides.clear()
