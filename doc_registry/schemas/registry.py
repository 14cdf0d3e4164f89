from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from doc_registry.services.validators import IDENTITY_MAX_LENGTH


# ---------------------------------------------------------------------------
# Documents
#
# Length and membership rules are enforced by services.validators so that
# each failure maps to its registry error code; these models check types only.
# ---------------------------------------------------------------------------


class DocumentRegister(BaseModel):
    name: str
    digest: str
    descriptor: str
    classification: str
    tags: list[str]


class DocumentModify(BaseModel):
    name: str
    digest: str
    descriptor: str
    tags: list[str]


class DocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    creator: str
    digest: str
    descriptor: str
    classification: str
    tags: list[str]
    created_at: int
    updated_at: int


class DocumentIdResponse(BaseModel):
    id: int


class OkResponse(BaseModel):
    ok: bool = True


class CounterRead(BaseModel):
    last_id: int


# ---------------------------------------------------------------------------
# Access grants
# ---------------------------------------------------------------------------


class AccessGrantCreate(BaseModel):
    grantee: str = Field(max_length=IDENTITY_MAX_LENGTH)
    permission_type: str
    duration: int
    modification_allowed: bool = False
