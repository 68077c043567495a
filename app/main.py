from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger

import uvicorn

from app.config import DEFAULT_SECRET_KEY, settings
from app.database import engine, Base
from app.errors import register_exception_handlers
from app.security.tokens import TokenService
from app.users.routers import router as user_router
from app.categories.router import router as category_router
from app.expenses.router import router as expenses_router


if settings.LOG_FILE:
    logger.add(settings.LOG_FILE, rotation="500 MB", level=settings.LOG_LEVEL)


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is the built-in placeholder; set it in the environment")
    Base.metadata.create_all(bind=engine)
    app.state.token_service = TokenService.from_settings(settings)
    yield
    logger.info("Application shutdown")

# Create app
app = FastAPI(
    title="EXPENSE LEDGER API",
    description="An API for recording personal expenses under user-owned categories.",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # For production, change to specific domains
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Routers
app.include_router(user_router, prefix="/users", tags=["Users"])
app.include_router(category_router, prefix="/categories", tags=["Categories"])
app.include_router(expenses_router, prefix="/expenses", tags=["Expenses"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)
