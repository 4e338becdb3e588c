import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from db import create_db_and_tables
from errors import ShareError
from routers import auth, donations, requests

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="FoodShare")


@app.on_event("startup")
def on_startup() -> None:
    create_db_and_tables()


@app.exception_handler(ShareError)
def share_error_handler(request: Request, exc: ShareError):
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        {"message": str(exc.detail)},
        status_code=exc.status_code,
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        problems.append(f"{field}: {error['msg']}" if field else error["msg"])
    return JSONResponse(
        {"message": "; ".join(problems) or "Invalid request"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"message": f"Server error: {exc}"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(auth.router, prefix="/api")
app.include_router(donations.router, prefix="/api")
app.include_router(requests.router, prefix="/api")
