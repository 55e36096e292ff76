import json
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import BaseModel

from ..config import ClientConfig
from ..errors import (
    InvalidArgument,
    RateLimited,
    SerializationError,
    TransportError,
    UpstreamError,
)

BODY_METHODS = {"POST", "PUT"}
API_VERSION = "2022-11-28"


def encode_body(method: str, body: Any) -> Optional[bytes]:
    """Validate and JSON-encode a request body.

    Only POST and PUT may carry a body. Bytes are taken as already encoded,
    pydantic models are dumped with their own serializer.
    """
    if body is None:
        return None
    if method.upper() not in BODY_METHODS:
        raise InvalidArgument(f"body is not allowed for method {method}")
    if isinstance(body, bytes):
        return body
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json().encode("utf-8")
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"could not encode request body: {exc}") from exc


def status_line(resp: httpx.Response) -> str:
    return f"{resp.status_code} {resp.reason_phrase}".strip()


class GitHubClient:
    """
    Low-level GitHub API wrapper.
    Only responsible for HTTP communication, callers decode the bytes.
    """

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        client_kwargs: dict[str, Any] = {
            "base_url": config.base_url,
            "timeout": config.timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        elif config.proxy:
            client_kwargs["proxy"] = config.proxy
        self.client = httpx.AsyncClient(**client_kwargs)

    @property
    def authenticated(self) -> bool:
        return bool(self.config.token)

    def _headers(self, with_auth: bool) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": self.config.user_agent,
        }
        if with_auth and self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    async def _send(self, method: str, endpoint: str, content: Optional[bytes], with_auth: bool) -> httpx.Response:
        req = self.client.build_request(
            method.upper(), endpoint, content=content, headers=self._headers(with_auth)
        )
        logger.debug(f"[github] {req.method} {req.url} auth={with_auth and self.authenticated}")
        try:
            return await self.client.send(req, stream=True)
        except httpx.RequestError as exc:
            logger.error(f"[github] request error: {type(exc).__name__} {exc!r}")
            raise TransportError(f"GitHub request error: {type(exc).__name__} {exc!r}") from exc

    async def _read(self, resp: httpx.Response) -> bytes:
        try:
            return await resp.aread()
        except httpx.HTTPError as exc:
            raise TransportError(f"GitHub response read error: {type(exc).__name__} {exc!r}") from exc

    async def request(self, method: str, endpoint: str, body: Any = None) -> bytes:
        content = encode_body(method, body)
        resp = await self._send(method, endpoint, content, with_auth=True)
        try:
            if resp.status_code == 403:
                remaining = resp.headers.get("X-RateLimit-Remaining", "")
                reset = resp.headers.get("X-RateLimit-Reset", "")
                logger.warning(f"[github] rate limited on {endpoint}, remaining={remaining!r} reset={reset!r}")
                raise RateLimited(remaining, reset)
            if resp.status_code >= 400:
                try:
                    text = (await resp.aread()).decode("utf-8", errors="replace")
                except httpx.HTTPError:
                    # the status is what matters, a broken body must not hide it
                    text = ""
                logger.warning(f"[github] {endpoint} failed: {status_line(resp)}")
                raise UpstreamError(status_line(resp), text)
            return await self._read(resp)
        finally:
            await resp.aclose()

    async def request_no_auth(self, method: str, endpoint: str, body: Any = None) -> bytes:
        content = encode_body(method, body)
        resp = await self._send(method, endpoint, content, with_auth=False)
        try:
            if resp.status_code >= 400:
                logger.warning(f"[github] {endpoint} failed: {status_line(resp)}")
                raise UpstreamError(status_line(resp))
            return await self._read(resp)
        finally:
            await resp.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
