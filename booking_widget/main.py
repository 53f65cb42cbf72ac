import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booking_widget.api.auth import router as auth_router
from booking_widget.api.businesses import router as businesses_router
from booking_widget.api.chat import router as chat_router
from booking_widget.application.exceptions import (
    DispatchError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from booking_widget.core.config import settings


class ContextFormatter(logging.Formatter):
    keys = (
        "session_id",
        "business_slug",
        "intent",
        "action",
        "status",
        "reason",
        "ref",
        "to",
        "subject",
        "body",
        "text",
    )

    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in self.keys:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger(__name__)

app = FastAPI(title="Booking Widget Engine", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, tags=["chat"])
app.include_router(businesses_router, tags=["businesses"])
app.include_router(auth_router, tags=["auth"])


@app.exception_handler(ValidationError)
def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Business introuvable."})


@app.exception_handler(UnauthorizedError)
def handle_unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "Non autorisé."})


@app.exception_handler(DispatchError)
def handle_dispatch_error(request: Request, exc: DispatchError) -> JSONResponse:
    ref = _new_ref()
    logger.error(
        "Notification dispatch failed",
        extra={"ref": ref, "reason": f"status={exc.status} {exc}"},
    )
    return JSONResponse(
        status_code=502,
        content={
            "error": "Désolé, votre demande n'a pas pu être transmise. Merci de confirmer à nouveau.",
            "ref": ref,
        },
    )


@app.exception_handler(StorageError)
def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    ref = _new_ref()
    logger.error("Storage failure", extra={"ref": ref, "reason": str(exc)})
    return JSONResponse(
        status_code=503,
        content={"error": "Désolé, le service est momentanément indisponible.", "ref": ref},
    )


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    ref = _new_ref()
    logger.exception("Unhandled error", extra={"ref": ref})
    return JSONResponse(status_code=500, content={"error": "Erreur serveur", "ref": ref})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def _new_ref() -> str:
    return uuid.uuid4().hex[:12]
