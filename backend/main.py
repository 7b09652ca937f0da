import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from db.database import create_db_and_tables, create_engine, create_session_maker
from routers.ai import router as ai_router
from routers.analytics import router as analytics_router
from routers.inspections import router as inspections_router
from routers.items import router as items_router
from routers.qr import router as qr_router
from routers.vendors import router as vendors_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("railvision")


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = create_engine()
    app.state.session_maker = create_session_maker(engine)
    await create_db_and_tables(engine)
    logger.info("Database ready")
    yield
    await engine.dispose()


app = FastAPI(
    title="RailVision Track Fitting API",
    description="API for tracking railway track-fitting items, inspections and warranties",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request data"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _validation_message(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Item routes
app.include_router(items_router, prefix="/api/items", tags=["items"])
app.include_router(inspections_router, prefix="/api/inspections", tags=["inspections"])
app.include_router(vendors_router, prefix="/api/vendors", tags=["vendors"])

# QR codes
app.include_router(qr_router, prefix="/api/qr", tags=["qr"])

# Dashboard, analytics and summaries
app.include_router(analytics_router, prefix="/api", tags=["analytics"])
app.include_router(ai_router, prefix="/api/ai", tags=["ai"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
