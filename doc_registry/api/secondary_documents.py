from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from doc_registry.api.deps import CallContext, atomic, get_call_context, get_db
from doc_registry.schemas.registry import (
    DocumentIdResponse,
    DocumentRead,
    DocumentRegister,
)
from doc_registry.services import secondary_documents as secondary_service

router = APIRouter(prefix="/secondary-documents", tags=["secondary-documents"])


@router.post(
    "", response_model=DocumentIdResponse, status_code=status.HTTP_201_CREATED
)
def advanced_document_registration(
    payload: DocumentRegister,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        document_id = secondary_service.secondary_documents.register(
            db, payload, ctx.identity, ctx.now
        )
    return DocumentIdResponse(id=document_id)


@router.get("/{document_id}", response_model=DocumentRead)
def get_secondary_document(document_id: int, db: Session = Depends(get_db)):
    return secondary_service.secondary_documents.get(db, document_id)
