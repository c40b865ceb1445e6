"""Storage clients.

Only the local filesystem backend ships with mc; cloud URLs resolve through
config aliases and are reported as unsupported until a transport is
registered in ``BACKENDS``.
"""
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from mc.client.base import Client, ContentInfo
from mc.client.fs import FsClient
from mc.config.schema import McConfig
from mc.errors import UnsupportedBackendError

BACKENDS: Dict[str, Callable[[str, McConfig], Client]] = {}

CLOUD_SCHEMES = frozenset({"http", "https"})


def is_cloud_url(url: str) -> bool:
    return urlparse(url).scheme in CLOUD_SCHEMES


def expand(arg: str, config: Optional[McConfig]) -> str:
    return config.expand_alias(arg) if config is not None else arg


def new_client(arg: str, config: Optional[McConfig] = None) -> Client:
    """Pick a client for a command-line URL or path."""
    url = expand(arg, config)
    scheme = urlparse(url).scheme
    if scheme in CLOUD_SCHEMES:
        factory = BACKENDS.get(scheme)
        if factory is None:
            raise UnsupportedBackendError(f"No storage backend is available for ‘{url}’.")
        return factory(url, config)
    if scheme == "file":
        return FsClient(urlparse(url).path)
    return FsClient(url)


__all__ = ["BACKENDS", "Client", "ContentInfo", "FsClient", "is_cloud_url", "new_client"]
