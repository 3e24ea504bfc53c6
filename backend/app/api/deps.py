from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from app.agent.llm_client import LLMClient
from app.emails import HelpRequestMailer


def get_db(request: Request) -> Generator[Session, None, None]:
    with Session(request.app.state.engine) as session:
        yield session


def get_llm(request: Request) -> LLMClient:
    return request.app.state.llm


def get_mailer(request: Request) -> HelpRequestMailer:
    return request.app.state.mailer


SessionDep = Annotated[Session, Depends(get_db)]
LLMDep = Annotated[LLMClient, Depends(get_llm)]
MailerDep = Annotated[HelpRequestMailer, Depends(get_mailer)]
