# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "cdn"

BLOBS: Final[str] = f"{ROOT}:blobs"
PATHS: Final[str] = f"{ROOT}:paths"  # registered path -> content hash
