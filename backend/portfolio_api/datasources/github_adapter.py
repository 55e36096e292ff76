from typing import List
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from ..errors import DecodeError
from ..schemas import Language, Repository, SearchResult, User
from .base import DataSource
from .github_client import GitHubClient

_repo_list = TypeAdapter(List[Repository])


def _decode(parse, data: bytes, what: str):
    try:
        return parse(data)
    except ValidationError as exc:
        first = exc.errors()[0]["msg"]
        raise DecodeError(f"unexpected {what} payload: {first}") from exc


class GitHubAdapter(DataSource):
    """Domain calls on top of GitHubClient. No retries, paging or caching."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def get_user(self, username: str) -> bytes:
        """Raw user document, left undecoded for the caller."""
        return await self.client.request_no_auth("GET", f"/users/{quote(username, safe='')}")

    async def get_user_followers(self, username: str) -> int:
        data = await self.client.request_no_auth("GET", f"/users/{quote(username, safe='')}")
        user: User = _decode(User.model_validate_json, data, "user")
        return user.followers

    async def search_repositories_by_language(self, language: Language) -> List[Repository]:
        query = f"?q=language:{quote(language, safe='')}"
        data = await self.client.request("GET", "/search/repositories" + query)
        result: SearchResult = _decode(SearchResult.model_validate_json, data, "search")
        return list(result.items)

    async def get_user_repositories(self, username: str) -> List[Repository]:
        data = await self.client.request("GET", f"/users/{quote(username, safe='')}/repos")
        return _decode(_repo_list.validate_json, data, "repository list")
