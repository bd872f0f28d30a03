# controller/cdn_controller.py
from fastapi import APIRouter, Depends, Request, Response
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_cdn_service, read_body
from model.api import ResponseEnvelope
from service.cdn_service import CdnService
from util.constants import CDN_METHODS, InternalURIs


def _limits() -> list:
    if settings.RATE_LIMIT_TIMES <= 0:
        return []
    return [
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]


cdn_router = APIRouter(dependencies=_limits())


def request_uri(request: Request) -> str:
    """
    Path plus query as the client sent them, still percent-encoded, so an
    encoded `?` or `#` stays part of the path.
    """
    raw = request.scope.get("raw_path")
    if raw:
        uri = raw.decode("latin-1").split("?", 1)[0]
    else:
        uri = request.url.path
    if request.url.query:
        uri += "?" + request.url.query
    return uri


def to_response(envelope: ResponseEnvelope) -> Response:
    return Response(
        content=envelope.body or b"",
        status_code=envelope.status_code,
        headers=envelope.headers,
    )


@cdn_router.api_route(InternalURIs.PUT, methods=CDN_METHODS)
@cdn_router.api_route(InternalURIs.PUT_PATH, methods=CDN_METHODS)
async def upload(
    request: Request,
    body: bytes = Depends(read_body),
    service: CdnService = Depends(get_cdn_service),
) -> Response:
    # Always an upload, even with an empty body; /put/a.html registers /a.html.
    uri = request_uri(request)[len(InternalURIs.PUT) :] or InternalURIs.ROOT
    envelope = await service.store(uri, request.headers, body)
    return to_response(envelope)


@cdn_router.api_route(InternalURIs.ANY_PATH, methods=CDN_METHODS)
async def serve(
    request: Request,
    body: bytes = Depends(read_body),
    service: CdnService = Depends(get_cdn_service),
) -> Response:
    envelope = await service.dispatch(
        request.method, request_uri(request), request.headers, body
    )
    return to_response(envelope)
