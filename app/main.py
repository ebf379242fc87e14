# app/main.py
import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.json import UTF8JSONResponse
from app.core.config import settings
from app.core.errors import request_validation_handler
from app.db.init_db import init_models

# routers
from app.posts.router import router as posts_router

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="Linkr API",
    default_response_class=UTF8JSONResponse,
)

# body ausente / path param inválido → mismo formato que ValidationError
app.add_exception_handler(RequestValidationError, request_validation_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "fastapi", "msg": "healthy ✨🔗"}


# routers
app.include_router(posts_router)  # /api/posts/...
