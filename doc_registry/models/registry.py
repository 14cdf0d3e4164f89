import enum

from sqlalchemy import (
    BigInteger,
    Boolean,
    Enum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from doc_registry.db import Base


class PermissionType(enum.Enum):
    view = "view"
    edit = "edit"
    full = "full"


# ---------------------------------------------------------------------------
# Document records
# ---------------------------------------------------------------------------


class DocumentColumns:
    """Columns shared by the primary and secondary document tables.

    Ids come from ``registry_counter``. The database never generates them.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    # name, digest and descriptor are unbounded: the enhanced update path
    # writes them without checking length.
    name: Mapped[str] = mapped_column(String, nullable=False)
    creator: Mapped[str] = mapped_column(String(255), nullable=False)
    digest: Mapped[str] = mapped_column(String, nullable=False)
    descriptor: Mapped[str] = mapped_column(String, nullable=False)
    classification: Mapped[str] = mapped_column(String(20), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    @declared_attr.directive
    def __table_args__(cls):
        return (Index(f"ix_{cls.__tablename__}_creator", "creator"),)


class DocumentRecord(DocumentColumns, Base):
    __tablename__ = "documents"

    grants = relationship("AccessGrant", back_populates="document")


class SecondaryDocumentRecord(DocumentColumns, Base):
    __tablename__ = "secondary_documents"


# ---------------------------------------------------------------------------
# Access grants
# ---------------------------------------------------------------------------


class AccessGrant(Base):
    __tablename__ = "access_grants"

    document_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("documents.id"), primary_key=True
    )
    grantee: Mapped[str] = mapped_column(String(255), primary_key=True)
    permission_type: Mapped[PermissionType] = mapped_column(
        Enum(PermissionType), nullable=False
    )
    granted_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    modification_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False)

    document = relationship("DocumentRecord", back_populates="grants")


# ---------------------------------------------------------------------------
# Shared id counter
# ---------------------------------------------------------------------------


class RegistryCounter(Base):
    __tablename__ = "registry_counter"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
