from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from doc_registry.errors import DocumentNotFound
from doc_registry.models.registry import DocumentRecord, SecondaryDocumentRecord
from doc_registry.observability import tracked
from doc_registry.schemas.registry import DocumentModify, DocumentRegister
from doc_registry.services import counter
from doc_registry.services.authorization import require_owner
from doc_registry.services.validators import (
    validate_document_fields,
    validate_update_time,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentChanges:
    name: str
    digest: str
    descriptor: str
    tags: list[str]

    @classmethod
    def from_payload(cls, payload: DocumentModify) -> DocumentChanges:
        return cls(
            name=payload.name,
            digest=payload.digest,
            descriptor=payload.descriptor,
            tags=list(payload.tags),
        )


def merge_document(
    record: DocumentRecord, changes: DocumentChanges, now: int
) -> dict[str, Any]:
    """Return the record's non-key column values with ``changes`` applied.

    Only the mutable fields and ``updated_at`` differ from ``record``; the
    record itself is not touched.
    """
    return {
        "name": changes.name,
        "creator": record.creator,
        "digest": changes.digest,
        "descriptor": changes.descriptor,
        "classification": record.classification,
        "tags": list(changes.tags),
        "created_at": record.created_at,
        "updated_at": now,
    }


def register_record(
    db: Session,
    model: type[DocumentRecord] | type[SecondaryDocumentRecord],
    payload: DocumentRegister,
    creator: str,
    now: int,
) -> int:
    validate_document_fields(
        payload.name,
        payload.digest,
        payload.descriptor,
        payload.tags,
        classification=payload.classification,
    )
    document_id = counter.next_id(db)
    record = model(
        id=document_id,
        name=payload.name,
        creator=creator,
        digest=payload.digest,
        descriptor=payload.descriptor,
        classification=payload.classification,
        tags=list(payload.tags),
        created_at=now,
        updated_at=now,
    )
    db.add(record)
    counter.advance(db, document_id)
    return document_id


class Documents:
    @staticmethod
    @tracked("register_document")
    def register(db: Session, payload: DocumentRegister, creator: str, now: int) -> int:
        document_id = register_record(db, DocumentRecord, payload, creator, now)
        logger.info("Registered document %s for %s", document_id, creator)
        return document_id

    @staticmethod
    def get(db: Session, document_id: int) -> DocumentRecord:
        document = db.get(DocumentRecord, document_id)
        if not document:
            raise DocumentNotFound()
        return document

    @staticmethod
    def _apply(
        db: Session, document: DocumentRecord, changes: DocumentChanges, now: int
    ) -> DocumentRecord:
        validate_update_time(now, document.updated_at)
        for key, value in merge_document(document, changes, now).items():
            setattr(document, key, value)
        db.flush()
        return document

    @staticmethod
    @tracked("modify_document")
    def update(
        db: Session, document_id: int, payload: DocumentModify, actor: str, now: int
    ) -> DocumentRecord:
        document = require_owner(db, document_id, actor)
        validate_document_fields(
            payload.name, payload.digest, payload.descriptor, payload.tags
        )
        Documents._apply(db, document, DocumentChanges.from_payload(payload), now)
        logger.info("Updated document %s", document_id)
        return document

    @staticmethod
    @tracked("secure_document_update")
    def secure_update(
        db: Session, document_id: int, payload: DocumentModify, actor: str, now: int
    ) -> DocumentRecord:
        document = require_owner(db, document_id, actor)
        validate_document_fields(
            payload.name, payload.digest, payload.descriptor, payload.tags
        )
        Documents._apply(db, document, DocumentChanges.from_payload(payload), now)
        logger.info("Securely updated document %s", document_id)
        return document

    @staticmethod
    @tracked("enhanced_document_modification")
    def enhanced_update(
        db: Session, document_id: int, payload: DocumentModify, actor: str, now: int
    ) -> DocumentRecord:
        # Ownership is the only check here; field formats are not validated.
        document = require_owner(db, document_id, actor)
        Documents._apply(db, document, DocumentChanges.from_payload(payload), now)
        logger.info("Modified document %s without field validation", document_id)
        return document


documents = Documents()
