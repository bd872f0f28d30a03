# controller/controller_dependencies.py
from fastapi import Request
from config.settings import Settings, settings
from repository.base import BlobStore, ResourceRegistry
from repository.blob_repository import RedisBlobRepository
from repository.http_blob_repository import HttpBlobRepository
from repository.memory_blob_repository import MemoryBlobRepository
from repository.registry_repository import (
    MemoryResourceRegistry,
    RedisResourceRegistry,
)
from service.cdn_service import CdnService
from util.enums import BlobBackend, ErrorMessage, RegistryBackend
from util.errors import AppError


def build_blob_store(cfg: Settings = settings) -> BlobStore:
    if cfg.BLOB_BACKEND == BlobBackend.MEMORY:
        return MemoryBlobRepository()
    if cfg.BLOB_BACKEND == BlobBackend.HTTP:
        if not cfg.BLOB_SERVICE_URL:
            raise ValueError("BLOB_SERVICE_URL is required for the http blob backend")
        return HttpBlobRepository(cfg.BLOB_SERVICE_URL)
    return RedisBlobRepository(ttl_seconds=cfg.BLOB_TTL_SECONDS)


def build_registry(cfg: Settings = settings) -> ResourceRegistry:
    if cfg.REGISTRY_BACKEND == RegistryBackend.REDIS:
        return RedisResourceRegistry()
    return MemoryResourceRegistry()


def build_cdn_service(cfg: Settings = settings) -> CdnService:
    return CdnService(
        build_blob_store(cfg),
        build_registry(cfg),
        cdn_host=cfg.CDN_NAME,
        legacy_ranges=cfg.RANGE_LEGACY,
        partial_length_total=cfg.PARTIAL_CONTENT_LENGTH_TOTAL,
    )


def get_cdn_service(request: Request) -> CdnService:
    # Built once in the lifespan so the registry is shared by all requests.
    return request.app.state.cdn_service


async def read_body(request: Request) -> bytes:
    max_bytes = settings.max_upload_bytes
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise AppError(
            ErrorMessage.UPLOAD_TOO_LARGE.value.message,
            ErrorMessage.UPLOAD_TOO_LARGE.value.http_status,
        )
    body = await request.body()
    if len(body) > max_bytes:
        raise AppError(
            ErrorMessage.UPLOAD_TOO_LARGE.value.message,
            ErrorMessage.UPLOAD_TOO_LARGE.value.http_status,
        )
    return body
