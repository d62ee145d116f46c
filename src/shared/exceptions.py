from typing import Any, Dict, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException, status

from src.shared.error_codes import ERROR_CODES
from src.shared.logging import get_logger

logger = get_logger(__name__)


# ───────────────────────── Base & Domain Exceptions ─────────────────────────
class DomainError(Exception):
    """Base class for domain-level errors. Services should raise or return these, never HTTPException."""
    code: str = "domain_error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.message = message or _msg_for(self.code)
        self.details = details
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        """Extra response headers for this error, if any."""
        return None


class NotFoundError(DomainError):
    # generic; set a specific code via constructor if needed (e.g., "receiver_not_found")
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InternalServerError(DomainError):
    code = "internal_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConfigurationError(ValueError):
    """Raised at startup when a configuration value cannot be parsed."""


# ───────────────────────────── Helpers ──────────────────────────────────────

def problem(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]],
    correlation_id: Optional[str],
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = details
    if correlation_id:
        body["correlation_id"] = correlation_id
    return body


def extract_correlation_id(req: Request) -> Optional[str]:
    return getattr(getattr(req, "state", None), "correlation_id", None)


def error_response(req: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError as the standard problem body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=problem(exc.code, exc.message, exc.details, extract_correlation_id(req)),
        headers=exc.headers,
    )


def _http_for(code: str) -> int:
    return int(ERROR_CODES.get(code, {}).get("http", status.HTTP_500_INTERNAL_SERVER_ERROR))

def _msg_for(code: str) -> str:
    return str(ERROR_CODES.get(code, {}).get("message", code))

# ─────────────────────────── Registration ───────────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def handle_app_error(req: Request, exc: DomainError):
        return error_response(req, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(req: Request, exc: RequestValidationError):
        code = "validation_error"
        return JSONResponse(
            status_code=_http_for(code),
            content=problem(code, _msg_for(code), {"errors": exc.errors()}, extract_correlation_id(req)),
        )

    @app.exception_handler(PydanticValidationError)
    async def handle_pydantic_validation(req: Request, exc: PydanticValidationError):
        code = "validation_error"
        return JSONResponse(
            status_code=_http_for(code),
            content=problem(code, _msg_for(code), {"errors": exc.errors()}, extract_correlation_id(req)),
        )

    @app.exception_handler(HTTPException)
    async def handle_http_exception(req: Request, exc: HTTPException):
        # map HTTP status → first matching ERROR_CODES entry
        reverse_map = {}
        for key, value in ERROR_CODES.items():
            reverse_map.setdefault(value["http"], key)
        code = reverse_map.get(exc.status_code, "internal_error")
        detail = getattr(exc, "detail", None)
        details = detail if isinstance(detail, dict) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=problem(code, str(detail) if isinstance(detail, str) else _msg_for(code), details, extract_correlation_id(req)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(req: Request, exc: Exception):
        code = "internal_error"
        logger.error("Unhandled exception", path=req.url.path, error_type=exc.__class__.__name__, exc_info=exc)
        return JSONResponse(
            status_code=_http_for(code),
            content=problem(code, _msg_for(code), {"type": exc.__class__.__name__}, extract_correlation_id(req)),
        )
