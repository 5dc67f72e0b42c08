from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from udaan.config import Settings, get_settings
from udaan.database import AsyncSessionLocal, init_db
from udaan.middleware.correlation import CorrelationMiddleware
from udaan.routes import career
from udaan.services.cache import TTLCache
from udaan.services.career_service import CareerSuggestionService
from udaan.services.openai_career_client import build_llm_client
from udaan.services.suggestion_store import SuggestionStore
from udaan.utils.logger import logger
from udaan.utils.metrics import get_snapshot

settings = get_settings()


def build_career_service(settings: Settings, store: SuggestionStore) -> CareerSuggestionService:
    """One service per process so the fallback cache is shared by all requests"""
    return CareerSuggestionService(
        client=build_llm_client(settings),
        cache=TTLCache(ttl_seconds=settings.career_fallback_cache_ttl),
        store=store,
        settings=settings,
    )


app = FastAPI(title=settings.app_name, version=settings.app_version)
app.state.limiter = career.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.state.suggestion_store = SuggestionStore(AsyncSessionLocal)
app.state.career_service = build_career_service(settings, app.state.suggestion_store)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)


# Field type errors -> 400 {"errors": [...]}
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


# Startup: Initialize database
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Udaan career service...")
    await init_db()
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")


@app.get("/")
async def root():
    return {"ok": True, "env": settings.environment}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    return get_snapshot()


# Register routes
app.include_router(career.router, prefix="/api/career", tags=["Career"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "udaan.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
