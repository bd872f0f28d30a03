# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.enums import Environment, BlobBackend, RegistryBackend
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")

CDN_DOMAIN_SUFFIX = ".nodesite.eu"


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    CDN_NAME: str = Field(default="cdn", validation_alias="CDN_NAME")
    HOST: str = Field(default="127.0.0.1", validation_alias="HOST")
    PORT: int = Field(default=20123, validation_alias="PORT")

    # Storage
    BLOB_BACKEND: BlobBackend = Field(
        default=BlobBackend.REDIS, validation_alias="BLOB_BACKEND"
    )
    BLOB_SERVICE_URL: str = Field(default="", validation_alias="BLOB_SERVICE_URL")
    BLOB_TTL_SECONDS: int = Field(default=0, validation_alias="BLOB_TTL_SECONDS")
    REGISTRY_BACKEND: RegistryBackend = Field(
        default=RegistryBackend.MEMORY, validation_alias="REGISTRY_BACKEND"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=0, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_UPLOAD_MB: int = Field(default=64, validation_alias="MAX_UPLOAD_MB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Range serving
    RANGE_LEGACY: bool = Field(default=False, validation_alias="RANGE_LEGACY")
    # True: a 206 carries the total blob length in Content-Length. uvicorn's
    # HTTP/1.1 protocols (h11, httptools) reject that body as shorter than
    # Content-Length and abort the transfer; set false when serving with uvicorn.
    PARTIAL_CONTENT_LENGTH_TOTAL: bool = Field(
        default=True, validation_alias="PARTIAL_CONTENT_LENGTH_TOTAL"
    )

    # Logging knobs
    LOGGER_NAME: str = "cdn"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="cdn.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("CDN_NAME")
    @classmethod
    def _with_domain_suffix(cls, v: str) -> str:
        # Returned URLs always point below the CDN domain.
        v = v.strip()
        if CDN_DOMAIN_SUFFIX not in v:
            v += CDN_DOMAIN_SUFFIX
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    @property
    def needs_redis(self) -> bool:
        return (
            self.BLOB_BACKEND == BlobBackend.REDIS
            or self.REGISTRY_BACKEND == RegistryBackend.REDIS
            or self.RATE_LIMIT_TIMES > 0
        )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
