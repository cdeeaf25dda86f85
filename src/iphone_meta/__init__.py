"""Public package interface for iphone_meta."""

from .asgi import AsyncIPhoneMiddleware
from .config import IPhoneConfig
from .loader import load_config
from .manifest import ManifestError, file_md5, manifest_entries, write_manifest
from .middleware import BodyRewriter, IPhoneMiddleware
from .rewriter import ResponseRewriter
from .types import TagSpec

__all__ = [
    "AsyncIPhoneMiddleware",
    "BodyRewriter",
    "IPhoneConfig",
    "IPhoneMiddleware",
    "ManifestError",
    "ResponseRewriter",
    "TagSpec",
    "file_md5",
    "load_config",
    "manifest_entries",
    "write_manifest",
]
