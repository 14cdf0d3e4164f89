from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from doc_registry.api.deps import get_db
from doc_registry.schemas.registry import CounterRead
from doc_registry.services import counter

router = APIRouter(prefix="/registry", tags=["registry"])


@router.get("/counter", response_model=CounterRead)
def get_counter(db: Session = Depends(get_db)):
    return CounterRead(last_id=counter.current_value(db))
