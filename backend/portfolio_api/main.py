from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .config import ClientConfig, Settings, get_settings
from .datasources.base import DataSource
from .datasources.github_adapter import GitHubAdapter
from .datasources.github_client import GitHubClient
from .errors import GitHubError
from .schemas import ErrorResponse, Language


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not app.state.owns_github:
        yield
        return

    settings: Settings = app.state.settings
    # raises ConfigurationError without a token, which aborts startup
    config = ClientConfig.from_settings(settings)
    client = GitHubClient(config, transport=app.state.transport)
    app.state.github = GitHubAdapter(client)
    logger.info(f"[startup] GitHub client ready, base_url={config.base_url} authenticated={client.authenticated}")
    try:
        yield
    finally:
        # every startup builds a fresh client, a closed one is never reused
        app.state.github = None
        await client.aclose()
        logger.info("[startup] GitHub client closed")


def get_github(request: Request) -> DataSource:
    return request.app.state.github


def create_app(
    github: Optional[DataSource] = None,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the app. Without `github` the lifespan creates (and closes) its own client."""
    settings = settings or get_settings()
    app = FastAPI(title="CV Site Portfolio API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.github = github
    app.state.owns_github = github is None
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/portfolio")
    async def portfolio(github: DataSource = Depends(get_github)):
        username = settings.portfolio_username
        try:
            repos = await github.get_user_repositories(username)
        except GitHubError as exc:
            logger.error(f"[routes] /portfolio for {username} failed: {exc}")
            return error_response(500, str(exc))
        return [repo.model_dump(by_alias=True) for repo in repos]

    @app.get("/search")
    async def search(q: Optional[str] = Query(None), github: DataSource = Depends(get_github)):
        if not q:
            return error_response(400, "Query parameter 'q' is required")
        try:
            repos = await github.search_repositories_by_language(Language(q))
        except GitHubError as exc:
            logger.error(f"[routes] /search q={q!r} failed: {exc}")
            return error_response(500, str(exc))
        return [repo.model_dump(by_alias=True) for repo in repos]

    @app.get("/followers")
    async def followers(username: Optional[str] = Query(None), github: DataSource = Depends(get_github)):
        if not username:
            return error_response(400, "Query parameter 'username' is required")
        try:
            count = await github.get_user_followers(username)
        except GitHubError as exc:
            logger.error(f"[routes] /followers username={username!r} failed: {exc}")
            return error_response(500, str(exc))
        return count

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
