"""Gestion standardisée des erreurs API.

Ce module traduit les exceptions du domaine en réponses JSON `status: error` portant l'URL de la
requête et un message lisible. Aucune erreur n'est avalée silencieusement.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from basin_service.api.deps import request_url
from basin_service.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
)
from basin_service.domain.errors import UpstreamError, ValidationError
from basin_service.domain.responses import ResponseAssembler

log = structlog.get_logger(__name__)

_assembler = ResponseAssembler()


def create_error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Crée la réponse d'erreur standard (enveloppe `status: error`)."""
    return JSONResponse(
        status_code=status_code,
        content=_assembler.error(request_url(request), message),
    )


def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Erreur corrigeable par l'appelant: 400."""
    log.info("basin_request_invalid", error_message=str(exc))
    return create_error_response(request, HTTP_BAD_REQUEST, str(exc))


def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    """Défaillance du service amont: 502."""
    log.error(
        "basin_upstream_failure",
        kind=type(exc).__name__,
        error_message=str(exc),
        upstream_url=exc.url,
    )
    return create_error_response(request, HTTP_BAD_GATEWAY, str(exc))


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Erreur inattendue: 500, détail dans les logs uniquement."""
    log.error(
        "unexpected_error",
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        exc_info=exc,
    )
    return create_error_response(
        request, HTTP_INTERNAL_SERVER_ERROR, "An unexpected error occurred"
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(Exception, handle_generic_exception)
