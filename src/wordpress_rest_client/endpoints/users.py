"""Users endpoints (``/wp/v2/users``)."""

from typing import Any

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import User
from .base import ResourceEndpoints

BASE_PATH = "/wp/v2/users"


class UsersEndpoints(ResourceEndpoints[User]):
    """Users, including the currently authenticated one."""

    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, BASE_PATH, User)

    async def delete(
        self,
        resource_id: int,
        reassign: int | None = None,
        force: bool = False,
        cancel: CancellationToken | None = None,
    ) -> User:
        """Delete a user, optionally reassigning their posts to another user.

        WordPress does not trash users; the server rejects the call unless
        ``force`` is set.
        """
        params: dict[str, Any] = {}
        if reassign:
            params["reassign"] = reassign
        if force:
            params["force"] = True
        result = await self._executor.delete(self._path(resource_id), params or None, cancel)
        if isinstance(result, dict) and "previous" in result:
            result = result["previous"]
        return User.model_validate(result)

    async def me(self, cancel: CancellationToken | None = None) -> User:
        """Fetch the user the current credentials belong to."""
        data = await self._executor.get_json(self._path("me"), {}, cancel)
        return User.model_validate(data)
