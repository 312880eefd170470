"""Posts endpoints (``/wp/v2/posts``)."""

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import Post
from .base import CUSTOM_PARAMS, ResourceEndpoints

BASE_PATH = "/wp/v2/posts"

# Custom taxonomy filters, e.g. {"language": "en"}, sent as top-level params.
TAXONOMY_PARAMS = "taxonomies"


class PostsEndpoints(ResourceEndpoints[Post]):
    """Posts plus their revision history."""

    flatten_params = (TAXONOMY_PARAMS, CUSTOM_PARAMS)

    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, BASE_PATH, Post)

    async def get_revisions(
        self,
        post_id: int,
        cancel: CancellationToken | None = None,
    ) -> list[Post]:
        path = f"{self._path(post_id)}/revisions"
        data = await self._executor.get_json(path, {}, cancel)
        return [Post.model_validate(item) for item in data]
