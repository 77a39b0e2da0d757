import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_analytics.core.config import settings
from finance_analytics.core.exceptions import UnauthorizedError, UpstreamError
from finance_analytics.routers import budgets, health, insights

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    if isinstance(exc, UnauthorizedError):
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    logger.warning(f"{request.method} {request.url.path} failed upstream: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "function": request.url.path.rstrip("/").rsplit("/", 1)[-1],
            "runtime": "Python",
        },
    )


# Root endpoint
@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


# Register routers
app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
app.include_router(budgets.router, prefix=f"{settings.API_PREFIX}/budget-analyzer", tags=["Budgets"])
app.include_router(insights.router, prefix=f"{settings.API_PREFIX}/calculate-insights", tags=["Insights"])
