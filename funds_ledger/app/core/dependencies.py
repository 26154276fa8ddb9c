from fastapi import Depends
from sqlmodel import Session

from ..services import CREDITS, DEBITS, RecordRepository, RecordService
from .config import Settings, get_settings
from .db import get_session


def get_credit_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> RecordService:
    repository = RecordRepository(session, CREDITS.model)
    return RecordService(session, CREDITS, repository, default_limit=settings.default_page_limit)


def get_debit_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> RecordService:
    repository = RecordRepository(session, DEBITS.model)
    return RecordService(session, DEBITS, repository, default_limit=settings.default_page_limit)
