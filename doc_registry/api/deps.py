from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock

from fastapi import Header
from sqlalchemy.orm import Session

from doc_registry.db import SessionLocal
from doc_registry.services.validators import IDENTITY_MAX_LENGTH, MAX_LOGICAL_TIME

# Mutations run one at a time, each committing or rolling back as a whole.
_EXECUTION_LOCK = Lock()


@dataclass(frozen=True)
class CallContext:
    identity: str
    now: int


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_call_context(
    identity: str = Header(
        alias="X-Caller-Identity", min_length=1, max_length=IDENTITY_MAX_LENGTH
    ),
    logical_time: int | None = Header(
        default=None, alias="X-Logical-Time", ge=0, le=MAX_LOGICAL_TIME
    ),
) -> CallContext:
    if logical_time is None:
        logical_time = int(datetime.now(timezone.utc).timestamp())
    return CallContext(identity=identity, now=logical_time)


@contextmanager
def atomic(db: Session):
    with _EXECUTION_LOCK:
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
