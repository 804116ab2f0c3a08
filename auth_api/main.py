import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import sentry_sdk

# 1. Load .env and configure logs
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from auth_api.core.config import settings
from auth_api.core.errors import AuthError, AuthErrorKind, DEFAULT_MESSAGES
from auth_api.core.responses import failure
from auth_api.db.base import Base
from auth_api.db.session import engine
from auth_api.middleware.auth import SessionAuthMiddleware
from auth_api.routes import auth, user

# Initialize Sentry (if DSN provided)
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,
    )

# 2. Lifespan (database)
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database ready.")
    except Exception as e:
        logger.error(f"CRITICAL DATABASE ERROR: {e}")
        raise
    yield
    logger.info("Shutting down...")

# 3. App
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Auth failures raised by dependencies (require_auth) render as the envelope, HTTP 200
@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(status_code=200, content=failure(exc))

# Malformed or wrongly typed bodies get the same envelope instead of FastAPI's 422
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg") if errors else DEFAULT_MESSAGES[AuthErrorKind.MISSING_FIELDS]
    logger.debug(f"Rejected request body on {request.url.path}: {errors}")
    return JSONResponse(status_code=200, content={"success": False, "message": message})

# 4. Middlewares
app.add_middleware(SessionAuthMiddleware, settings=settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 5. Routes
@app.get("/", response_class=PlainTextResponse)
def root():
    return "API Working"

app.include_router(auth.router)
app.include_router(user.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("auth_api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "4000")))
