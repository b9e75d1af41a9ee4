"""Application-level exceptions and FastAPI exception handlers."""


from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None, code: str = "NOT_FOUND"):
        msg = f"{entity} not found" if entity_id is None else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code=code)

class ConflictError(AppException):
    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, status_code=409, code=code)

class BadRequestError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=400, code="BAD_REQUEST")

# ---------------------------------------------------------------------------
# Point-of-sale domain errors
# ---------------------------------------------------------------------------

class PosNotFoundError(NotFoundError):
    def __init__(self, lookup: str, value: object):
        super().__init__("POS", f"{lookup}={value}", code="POS_NOT_FOUND")
        self.lookup = lookup
        self.value = value

class DuplicatePosNameError(ConflictError):
    def __init__(self, name: str):
        super().__init__(f"POS with name '{name}' already exists", code="DUPLICATE_POS_NAME")
        self.name = name

class OsmNodeNotFoundError(AppException):
    """Raised when a node cannot be retrieved from the OpenStreetMap API."""

    def __init__(self, node_id: int, reason: str | None = None):
        msg = f"OpenStreetMap node {node_id} not found"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, status_code=404, code="OSM_NODE_NOT_FOUND")
        self.node_id = node_id

class OsmNodeMissingFieldsError(AppException):
    """Raised when an OpenStreetMap node lacks a field needed to build a POS."""

    def __init__(self, node_id: int, field: str):
        super().__init__(
            f"OpenStreetMap node {node_id} is missing or has an invalid '{field}' field",
            status_code=422,
            code="OSM_NODE_MISSING_FIELDS",
        )
        self.node_id = node_id
        self.field = field

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}

def _validation_message(exc: RequestValidationError) -> str:
    """`body.postalCode: Input should be a valid integer; ...`"""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("BAD_REQUEST", _validation_message(exc)),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
