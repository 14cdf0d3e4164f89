import logging

from sqlalchemy.orm import Session

from doc_registry.errors import DocumentNotFound
from doc_registry.models.registry import SecondaryDocumentRecord
from doc_registry.observability import tracked
from doc_registry.schemas.registry import DocumentRegister
from doc_registry.services.documents import register_record

logger = logging.getLogger(__name__)


class SecondaryDocuments:
    """Registration into the secondary store.

    Ids are drawn from the same counter as the primary registry, so the two
    stores split one interleaved id space.
    """

    @staticmethod
    @tracked("advanced_document_registration")
    def register(db: Session, payload: DocumentRegister, creator: str, now: int) -> int:
        document_id = register_record(
            db, SecondaryDocumentRecord, payload, creator, now
        )
        logger.info("Registered secondary document %s for %s", document_id, creator)
        return document_id

    @staticmethod
    def get(db: Session, document_id: int) -> SecondaryDocumentRecord:
        document = db.get(SecondaryDocumentRecord, document_id)
        if not document:
            raise DocumentNotFound()
        return document


secondary_documents = SecondaryDocuments()
