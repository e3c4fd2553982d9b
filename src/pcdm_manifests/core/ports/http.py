from typing import Any, Protocol


class JsonFetcher(Protocol):
    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]: ...

    async def aclose(self) -> None: ...
