from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class RegistryError(HTTPException):
    """Base for the registry's stable error taxonomy.

    Each subclass carries a fixed ``code`` and HTTP status so that service
    callers can match on the type and API clients on the payload code.
    """

    code = "registry_error"
    status_code = 400
    message = "Registry operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.code, "message": self.message},
        )


class NotAuthorized(RegistryError):
    code = "not_authorized"
    status_code = 403
    message = "Caller is not the document creator"


class DocumentExists(RegistryError):
    # Reserved; no operation raises it.
    code = "document_exists"
    status_code = 409
    message = "Document already exists"


class DocumentNotFound(RegistryError):
    code = "document_not_found"
    status_code = 404
    message = "Document not found"


class InvalidDocumentData(RegistryError):
    code = "invalid_document_data"
    message = "Invalid document data"


class InvalidDescriptor(RegistryError):
    code = "invalid_descriptor"
    message = "Invalid descriptor"


class InvalidAccessType(RegistryError):
    code = "invalid_access_type"
    message = "Invalid access type"


class InvalidTimestamp(RegistryError):
    code = "invalid_timestamp"
    message = "Invalid access duration"


class AccessDenied(RegistryError):
    # Reserved; no operation raises it.
    code = "access_denied"
    status_code = 403
    message = "Access denied"


class InvalidClassification(RegistryError):
    code = "invalid_classification"
    message = "Invalid classification"


def _error_payload(code: str, message: str, details):
    return {"code": code, "message": message, "details": details}


def register_error_handlers(app) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        detail = exc.detail
        code = f"http_{exc.status_code}"
        message = "Request failed"
        details = None
        if isinstance(detail, dict):
            code = detail.get("code", code)
            message = detail.get("message", message)
            details = detail.get("details")
        elif isinstance(detail, str):
            message = detail
        else:
            details = detail
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(code, message, details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        # exc.errors() ctx may contain raw Exception objects (not JSON-serialisable).
        errors = [
            {k: str(v) if k == "ctx" else v for k, v in err.items() if k != "url"}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=_error_payload("validation_error", "Validation error", errors),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content=_error_payload("internal_error", "Internal server error", None),
        )
