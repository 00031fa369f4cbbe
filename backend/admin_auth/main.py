import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_auth.core.config import require_jwt_secret, settings
from admin_auth.core.database import init_db
from admin_auth.core.errors import AuthError
from admin_auth.routes.auth import router as auth_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

require_jwt_secret()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Startup config: ENV=%s token_hours=%s bcrypt_rounds=%s cookie=%s",
        settings.ENV,
        settings.SESSION_TOKEN_EXPIRE_HOURS,
        settings.BCRYPT_ROUNDS,
        settings.SESSION_COOKIE_NAME,
    )
    init_db()
    yield


app = FastAPI(title="Admin Auth", lifespan=lifespan)


@app.exception_handler(AuthError)
def auth_error_handler(request: Request, exc: AuthError):  # noqa: ARG001
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException):  # noqa: ARG001
    detail = exc.detail
    message = detail if isinstance(detail, str) and detail else "Request failed"
    return JSONResponse(status_code=exc.status_code, content={"message": message})


def _public_errors(exc: RequestValidationError) -> list[dict]:
    # `input` and `ctx` can echo the request body, passwords included.
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request payload",
            "details": {"errors": _public_errors(exc)},
        },
    )


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
