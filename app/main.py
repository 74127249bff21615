import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.exceptions import (
    UnauthorizedException,
    NotFoundException,
    ForbiddenException,
    ValidationException,
    ReferenceViolationException,
    DependencyExistsException,
    PartialCascadeFailureException,
)
from app.core.logging import configure_logging
from app.routes import (
    auth_routes,
    budget_routes,
    card_routes,
    category_routes,
    ledger_routes,
    transaction_routes,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(ReferenceViolationException)
async def reference_violation_exception_handler(request: Request, exc: ReferenceViolationException):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "field": exc.field, "ref_id": exc.ref_id},
    )


@app.exception_handler(DependencyExistsException)
async def dependency_exists_exception_handler(request: Request, exc: DependencyExistsException):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "dependents": exc.dependents},
    )


@app.exception_handler(PartialCascadeFailureException)
async def partial_cascade_failure_handler(request: Request, exc: PartialCascadeFailureException):
    logger.error("Partial cascade on %s %s: %s", request.method, request.url.path, exc.remaining)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "remaining": exc.remaining},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Finance Tracker API",
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(auth_routes.users_router, prefix="/api/users", tags=["Users"])
app.include_router(card_routes.router, prefix="/api/cards", tags=["Cards"])
app.include_router(category_routes.router, prefix="/api/categories", tags=["Categories"])
app.include_router(budget_routes.router, prefix="/api/budgets", tags=["Budgets"])
app.include_router(ledger_routes.router, prefix="/api/ledgers", tags=["Ledgers"])
app.include_router(transaction_routes.router, prefix="/api/transactions", tags=["Transactions"])
