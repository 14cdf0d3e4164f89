"""Field-format and business-rule checks for registry mutations.

Every ``validate_*`` function raises exactly one registry error kind. The
``is_valid_*`` predicates are the same rules without raising.
"""

from collections.abc import Sequence

from doc_registry.errors import (
    InvalidAccessType,
    InvalidClassification,
    InvalidDescriptor,
    InvalidDocumentData,
    InvalidTimestamp,
)
from doc_registry.models.registry import PermissionType

NAME_MAX_LENGTH = 50
DIGEST_LENGTH = 64
DESCRIPTOR_MAX_LENGTH = 200
CLASSIFICATION_MAX_LENGTH = 20
TAGS_MAX_COUNT = 5
TAG_MAX_LENGTH = 30
MAX_ACCESS_DURATION = 52560
IDENTITY_MAX_LENGTH = 255
# Largest "now" whose grant expiry still fits a signed 64-bit column.
MAX_LOGICAL_TIME = 2**63 - 1 - MAX_ACCESS_DURATION

_VALID_PERMISSION_TYPES = {e.value for e in PermissionType}


def _length_between(value: str, low: int, high: int) -> bool:
    return isinstance(value, str) and low <= len(value) <= high


def is_valid_name(name: str) -> bool:
    return _length_between(name, 1, NAME_MAX_LENGTH)


def is_valid_digest(digest: str) -> bool:
    return isinstance(digest, str) and len(digest) == DIGEST_LENGTH


def is_valid_descriptor(descriptor: str) -> bool:
    return _length_between(descriptor, 1, DESCRIPTOR_MAX_LENGTH)


def is_valid_classification(classification: str) -> bool:
    return _length_between(classification, 1, CLASSIFICATION_MAX_LENGTH)


def is_valid_tags(tags: Sequence[str]) -> bool:
    if isinstance(tags, str) or not 1 <= len(tags) <= TAGS_MAX_COUNT:
        return False
    return all(_length_between(tag, 1, TAG_MAX_LENGTH) for tag in tags)


def is_valid_permission_type(permission_type: str) -> bool:
    return permission_type in _VALID_PERMISSION_TYPES


def is_valid_duration(duration: int) -> bool:
    if isinstance(duration, bool) or not isinstance(duration, int):
        return False
    return 0 < duration <= MAX_ACCESS_DURATION


def is_distinct_grantee(grantee: str, actor: str) -> bool:
    return grantee != actor


def validate_name(name: str) -> None:
    if not is_valid_name(name):
        raise InvalidDocumentData(f"Name must be 1-{NAME_MAX_LENGTH} characters")


def validate_digest(digest: str) -> None:
    if not is_valid_digest(digest):
        raise InvalidDocumentData(f"Digest must be exactly {DIGEST_LENGTH} characters")


def validate_descriptor(descriptor: str) -> None:
    if not is_valid_descriptor(descriptor):
        raise InvalidDescriptor(
            f"Descriptor must be 1-{DESCRIPTOR_MAX_LENGTH} characters"
        )


def validate_classification(classification: str) -> None:
    if not is_valid_classification(classification):
        raise InvalidClassification(
            f"Classification must be 1-{CLASSIFICATION_MAX_LENGTH} characters"
        )


def validate_tags(tags: Sequence[str]) -> None:
    if not is_valid_tags(tags):
        raise InvalidDocumentData(
            f"Tags must be 1-{TAGS_MAX_COUNT} entries of 1-{TAG_MAX_LENGTH} characters"
        )


def validate_permission_type(permission_type: str) -> None:
    if not is_valid_permission_type(permission_type):
        raise InvalidAccessType(
            f"Invalid permission_type. Allowed: {sorted(_VALID_PERMISSION_TYPES)}"
        )


def validate_duration(duration: int) -> None:
    if not is_valid_duration(duration):
        raise InvalidTimestamp(
            f"Duration must be greater than 0 and at most {MAX_ACCESS_DURATION}"
        )


def validate_logical_time(now: int) -> None:
    if not 0 <= now <= MAX_LOGICAL_TIME:
        raise InvalidTimestamp(
            f"Logical time must be between 0 and {MAX_LOGICAL_TIME}"
        )


def validate_update_time(now: int, last_updated_at: int) -> None:
    if now < last_updated_at:
        raise InvalidTimestamp("Logical time is earlier than the last update")


def validate_grantee(grantee: str, actor: str) -> None:
    if not is_distinct_grantee(grantee, actor):
        raise InvalidDocumentData("Cannot grant access to yourself")


def validate_document_fields(
    name: str,
    digest: str,
    descriptor: str,
    tags: Sequence[str],
    classification: str | None = None,
) -> None:
    """Run the document checks in registration order.

    ``classification`` is only checked when given; updates never carry one.
    """
    validate_name(name)
    validate_digest(digest)
    validate_descriptor(descriptor)
    if classification is not None:
        validate_classification(classification)
    validate_tags(tags)
