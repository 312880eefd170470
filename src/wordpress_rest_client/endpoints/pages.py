"""Pages endpoints (``/wp/v2/pages``)."""

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import Page
from .base import ResourceEndpoints

BASE_PATH = "/wp/v2/pages"


class PagesEndpoints(ResourceEndpoints[Page]):
    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, BASE_PATH, Page)

    async def get_revisions(
        self,
        page_id: int,
        cancel: CancellationToken | None = None,
    ) -> list[Page]:
        path = f"{self._path(page_id)}/revisions"
        data = await self._executor.get_json(path, {}, cancel)
        return [Page.model_validate(item) for item in data]
