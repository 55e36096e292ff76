from typing import List, Protocol

from ..schemas import Language, Repository


class DataSource(Protocol):
    async def get_user(self, username: str) -> bytes:
        ...

    async def get_user_followers(self, username: str) -> int:
        ...

    async def search_repositories_by_language(self, language: Language) -> List[Repository]:
        ...

    async def get_user_repositories(self, username: str) -> List[Repository]:
        ...
