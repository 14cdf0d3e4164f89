from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from doc_registry.api.deps import CallContext, atomic, get_call_context, get_db
from doc_registry.schemas.registry import (
    AccessGrantCreate,
    DocumentIdResponse,
    DocumentModify,
    DocumentRead,
    DocumentRegister,
    OkResponse,
)
from doc_registry.services import access as access_service
from doc_registry.services import documents as doc_service

router = APIRouter(prefix="/documents", tags=["documents"])


# ------------------------------------------------------------------
# Registration and reads
# ------------------------------------------------------------------


@router.post(
    "", response_model=DocumentIdResponse, status_code=status.HTTP_201_CREATED
)
def register_document(
    payload: DocumentRegister,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        document_id = doc_service.documents.register(
            db, payload, ctx.identity, ctx.now
        )
    return DocumentIdResponse(id=document_id)


@router.get("/{document_id}", response_model=DocumentRead)
def get_document(document_id: int, db: Session = Depends(get_db)):
    return doc_service.documents.get(db, document_id)


# ------------------------------------------------------------------
# Update entrypoints
# ------------------------------------------------------------------


@router.put("/{document_id}", response_model=OkResponse)
def modify_document(
    document_id: int,
    payload: DocumentModify,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        doc_service.documents.update(db, document_id, payload, ctx.identity, ctx.now)
    return OkResponse()


@router.put("/{document_id}/enhanced", response_model=OkResponse)
def enhanced_document_modification(
    document_id: int,
    payload: DocumentModify,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        doc_service.documents.enhanced_update(
            db, document_id, payload, ctx.identity, ctx.now
        )
    return OkResponse()


@router.put("/{document_id}/secure", response_model=OkResponse)
def secure_document_update(
    document_id: int,
    payload: DocumentModify,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        doc_service.documents.secure_update(
            db, document_id, payload, ctx.identity, ctx.now
        )
    return OkResponse()


# ------------------------------------------------------------------
# Access grants
# ------------------------------------------------------------------


@router.post("/{document_id}/access", response_model=OkResponse)
def authorize_access(
    document_id: int,
    payload: AccessGrantCreate,
    ctx: CallContext = Depends(get_call_context),
    db: Session = Depends(get_db),
):
    with atomic(db):
        access_service.access_grants.grant(
            db, document_id, payload, ctx.identity, ctx.now
        )
    return OkResponse()
