"""Config file schemas.

Version history:
  1.0.0  credentials nested under hosts.<glob>.auth
  2      credentials flattened into hosts.<glob>
  3      adds the signature ``api`` per host (current)
"""
import fnmatch
import re
from typing import Dict, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

CURRENT_CONFIG_VERSION = "3"

_ALIAS_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


# ---------- Legacy ----------


class AuthV1(_Strict):
    access_key_id: str = Field(default="", alias="accessKeyId")
    secret_access_key: str = Field(default="", alias="secretAccessKey")


class HostV1(_Strict):
    auth: AuthV1 = Field(default_factory=AuthV1)


class ConfigV1(_Strict):
    version: Literal["1.0.0"]
    aliases: Dict[str, str] = Field(default_factory=dict)
    hosts: Dict[str, HostV1] = Field(default_factory=dict)


class HostV2(_Strict):
    access_key_id: str = Field(default="", alias="accessKeyId")
    secret_access_key: str = Field(default="", alias="secretAccessKey")


class ConfigV2(_Strict):
    version: Literal["2"]
    aliases: Dict[str, str] = Field(default_factory=dict)
    hosts: Dict[str, HostV2] = Field(default_factory=dict)


# ---------- Current ----------


class HostConfig(_Strict):
    access_key_id: str = Field(default="", alias="accessKeyId")
    secret_access_key: str = Field(default="", alias="secretAccessKey")
    api: Literal["S3v2", "S3v4"] = "S3v4"


class McConfig(_Strict):
    version: Literal["3"] = CURRENT_CONFIG_VERSION
    aliases: Dict[str, str] = Field(default_factory=dict)
    hosts: Dict[str, HostConfig] = Field(default_factory=dict)

    @field_validator("aliases")
    @classmethod
    def _check_aliases(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name, url in value.items():
            if not _ALIAS_NAME.match(name):
                raise ValueError(f"invalid alias name '{name}'")
            if not urlparse(url).scheme:
                raise ValueError(f"alias '{name}' must map to a URL with a scheme, got '{url}'")
        return value

    def expand_alias(self, arg: str) -> str:
        """Expand ``alias/rest`` to ``<alias url>/rest``; other input unchanged."""
        name, sep, rest = arg.partition("/")
        target = self.aliases.get(name)
        if target is None:
            return arg
        if not sep:
            return target
        return target.rstrip("/") + "/" + rest

    def host_for(self, url: str) -> Optional[HostConfig]:
        """Find the host entry whose glob matches the URL's host[:port]."""
        netloc = urlparse(url).netloc
        for pattern, host in self.hosts.items():
            if fnmatch.fnmatch(netloc, pattern):
                return host
        return None

    def to_file(self) -> dict:
        return self.model_dump(by_alias=True)


def default_config() -> McConfig:
    """The config written on first run."""
    return McConfig(
        aliases={
            "s3": "https://s3.amazonaws.com",
            "play": "https://play.minio.io:9000",
            "localhost": "http://localhost:9000",
            "gcs": "https://storage.googleapis.com",
        },
        hosts={
            "localhost:*": HostConfig(),
            "127.0.0.1:*": HostConfig(),
            "s3*.amazonaws.com": HostConfig(),
            "play.minio.io:9000": HostConfig(),
            "storage.googleapis.com": HostConfig(api="S3v2"),
        },
    )
