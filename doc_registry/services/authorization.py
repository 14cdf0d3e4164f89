from sqlalchemy.orm import Session

from doc_registry.errors import DocumentNotFound, NotAuthorized
from doc_registry.models.registry import DocumentRecord


def is_owner(db: Session, document_id: int, identity: str) -> bool:
    """True iff the document exists in the primary registry and ``identity``
    created it. An absent document is reported as ``False``, not an error."""
    document = db.get(DocumentRecord, document_id)
    if document is None:
        return False
    return document.creator == identity


def require_owner(db: Session, document_id: int, identity: str) -> DocumentRecord:
    document = db.get(DocumentRecord, document_id)
    if document is None:
        raise DocumentNotFound()
    if document.creator != identity:
        raise NotAuthorized()
    return document
