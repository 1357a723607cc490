"""Request description and body encoding (JSON vs multipart)."""

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from translateplus.config.settings import VERSION
from translateplus.errors import TranslatePlusError

USER_AGENT = f"translateplus-python/{VERSION}"


@dataclass(frozen=True)
class RequestSpec:
    method: str
    path: str
    data: dict[str, Any] | None = None
    files: dict[str, str] | None = None  # form field name -> local file path
    params: dict[str, Any] | None = None

    @property
    def is_multipart(self) -> bool:
        return self.files is not None


@dataclass
class EncodedRequest:
    """Keyword arguments for ``httpx.AsyncClient.request``."""

    headers: dict[str, str]
    json: Any = None
    data: dict[str, str] | None = None
    files: dict[str, tuple[str, bytes]] | None = None
    params: dict[str, Any] | None = None

    def as_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": self.headers}
        if self.json is not None:
            kwargs["json"] = self.json
        if self.data is not None:
            kwargs["data"] = self.data
        if self.files is not None:
            kwargs["files"] = self.files
        if self.params is not None:
            kwargs["params"] = self.params
        return kwargs


async def encode_request(spec: RequestSpec, api_key: str) -> EncodedRequest:
    """Build headers and body for a request.

    With files present the body is multipart: data values become string form
    fields and each file becomes a part named after its map key, carrying the
    local basename as filename. File contents are read here, once, off the event
    loop thread, so every retry attempt sends identical bytes.

    Raises:
        TranslatePlusError: VALIDATION kind if a file does not exist.
    """
    headers = {
        "X-API-KEY": api_key,
        "User-Agent": USER_AGENT,
    }

    if spec.is_multipart:
        form = {key: str(value) for key, value in (spec.data or {}).items()}
        parts: dict[str, tuple[str, bytes]] = {}
        for name, path in spec.files.items():
            if not os.path.isfile(path):
                raise TranslatePlusError.validation(f"File not found: {path}")
            content = await asyncio.to_thread(Path(path).read_bytes)
            parts[name] = (os.path.basename(path), content)
        # Content-Type (with boundary) is set by httpx for multipart bodies
        return EncodedRequest(headers=headers, data=form, files=parts, params=spec.params)

    headers["Content-Type"] = "application/json"
    return EncodedRequest(headers=headers, json=spec.data, params=spec.params)
