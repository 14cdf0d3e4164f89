import logging

from sqlalchemy.orm import Session

from doc_registry.models.registry import AccessGrant, PermissionType
from doc_registry.observability import tracked
from doc_registry.schemas.registry import AccessGrantCreate
from doc_registry.services.authorization import require_owner
from doc_registry.services.validators import (
    validate_duration,
    validate_grantee,
    validate_logical_time,
    validate_permission_type,
)

logger = logging.getLogger(__name__)


class AccessGrants:
    @staticmethod
    @tracked("authorize_access")
    def grant(
        db: Session,
        document_id: int,
        payload: AccessGrantCreate,
        actor: str,
        now: int,
    ) -> AccessGrant:
        """Grant ``payload.grantee`` access to a document owned by ``actor``.

        An existing grant for the same (document, grantee) pair is replaced
        wholesale. ``expires_at`` is stored for reference and never enforced.
        """
        require_owner(db, document_id, actor)
        validate_grantee(payload.grantee, actor)
        validate_permission_type(payload.permission_type)
        validate_duration(payload.duration)
        validate_logical_time(now)

        values = {
            "permission_type": PermissionType(payload.permission_type),
            "granted_at": now,
            "expires_at": now + payload.duration,
            "modification_allowed": payload.modification_allowed,
        }
        grant = db.get(AccessGrant, (document_id, payload.grantee))
        if grant is None:
            grant = AccessGrant(
                document_id=document_id, grantee=payload.grantee, **values
            )
            db.add(grant)
        else:
            for key, value in values.items():
                setattr(grant, key, value)
        db.flush()
        logger.info(
            "Granted %s access on document %s to %s until %s",
            payload.permission_type,
            document_id,
            payload.grantee,
            grant.expires_at,
        )
        return grant


access_grants = AccessGrants()
