import logging

from sqlalchemy.orm import Session

from doc_registry.models.registry import RegistryCounter

logger = logging.getLogger(__name__)

_COUNTER_ROW_ID = 1


def init_counter(db: Session) -> RegistryCounter:
    """Create the shared id counter at 0 if it does not exist yet."""
    counter = db.get(RegistryCounter, _COUNTER_ROW_ID)
    if counter is None:
        counter = RegistryCounter(id=_COUNTER_ROW_ID, value=0)
        db.add(counter)
        db.flush()
        logger.info("Initialised registry counter at 0")
    return counter


def current_value(db: Session) -> int:
    counter = db.get(RegistryCounter, _COUNTER_ROW_ID)
    return counter.value if counter is not None else 0


def next_id(db: Session) -> int:
    """Id the next registration will receive; does not advance the counter."""
    return current_value(db) + 1


def advance(db: Session, document_id: int) -> None:
    # Only called from a registration after its record has been staged.
    counter = init_counter(db)
    counter.value = document_id
    db.flush()
