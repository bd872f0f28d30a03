# main.py
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, ErrorMessage
from fastapi import FastAPI, Request, status
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis, ping_redis
from controller.cdn_controller import request_uri, to_response
from controller.controller_dependencies import build_cdn_service
from fastapi.responses import JSONResponse
from model.api import ErrorResponse, ResponseEnvelope
from service.cdn_service import CdnService
from util.constants import JSON_CONTENT_TYPE, METHODS_RETRIEVE
from util.errors import AppError, BlobNotFoundError, BlobStoreError
from util.functions import cors_headers
from util.logger import init_logger


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    logger = init_logger()
    print(f"{Color.GREEN}Initializing...{Color.RESET}")
    service = build_cdn_service(settings)
    fastApi.state.cdn_service = service
    try:
        if settings.needs_redis:
            redis = await get_redis()
            if settings.RATE_LIMIT_TIMES > 0:
                await FastAPILimiter.init(redis, identifier=_real_ip)
        logger.info(
            "cdn.start host=%s blobs=%s registry=%s",
            settings.CDN_NAME,
            settings.BLOB_BACKEND.value,
            settings.REGISTRY_BACKEND.value,
        )
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        yield
    finally:
        aclose = getattr(service.blobs, "aclose", None)
        if aclose is not None:
            await aclose()
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "PUT"],
    allow_headers=["*"],
)


def _error_envelope(request: Request, code: int, message: str) -> ResponseEnvelope:
    payload = ErrorResponse(error=code, url=request_uri(request), message=message)
    return ResponseEnvelope(
        status_code=code,
        headers={"Content-Type": JSON_CONTENT_TYPE, **cors_headers(METHODS_RETRIEVE)},
        body=payload.model_dump_json(exclude_none=True).encode("utf-8"),
    )


@app.get("/healthz")
async def healthz():
    if not settings.needs_redis:
        return {"ok": True}
    return {"ok": await ping_redis()}


@app.exception_handler(BlobNotFoundError)
async def blob_not_found_handler(request: Request, exc: BlobNotFoundError):
    return to_response(CdnService.not_found(request_uri(request)))


@app.exception_handler(BlobStoreError)
async def blob_store_handler(request: Request, exc: BlobStoreError):
    info = ErrorMessage.BLOB_STORE_UNAVAILABLE.value
    return to_response(_error_envelope(request, info.http_status, info.message))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return to_response(_error_envelope(request, exc.status_code, str(exc.detail)))


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    info = ErrorMessage.RATE_LIMITED.value
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": info.http_status, "message": info.message},
        headers={"Retry-After": "60", **cors_headers(METHODS_RETRIEVE)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=reload)
