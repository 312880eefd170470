"""Site settings endpoint (``/wp/v2/settings``). Requires admin credentials."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import Settings
from .base import to_body

BASE_PATH = "/wp/v2/settings"


class SettingsEndpoints:
    """Read and update the site settings singleton."""

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get(
        self,
        params: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> Settings:
        """Fetch the site settings."""
        data = await self._executor.get_json(BASE_PATH, params or {}, cancel)
        return Settings.model_validate(data)

    async def update(
        self,
        data: Mapping[str, Any] | BaseModel,
        cancel: CancellationToken | None = None,
    ) -> Settings:
        """Update settings; only the given fields change."""
        result = await self._executor.put(BASE_PATH, to_body(data), cancel)
        return Settings.model_validate(result)
