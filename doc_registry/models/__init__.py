from doc_registry.models.registry import (  # noqa: F401
    AccessGrant,
    DocumentRecord,
    PermissionType,
    RegistryCounter,
    SecondaryDocumentRecord,
)
