"""Navigation menu endpoints (``/wp/v2/menus`` and ``/wp/v2/menu-items``).

Menus and menu items are deleted without ``force``; the server decides
whether that is permanent.
"""

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import Menu, MenuItem
from .base import ResourceEndpoints

MENUS_PATH = "/wp/v2/menus"
MENU_ITEMS_PATH = "/wp/v2/menu-items"


class MenuItemsEndpoints(ResourceEndpoints[MenuItem]):
    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, MENU_ITEMS_PATH, MenuItem)

    async def delete(  # type: ignore[override]
        self,
        resource_id: int,
        cancel: CancellationToken | None = None,
    ) -> MenuItem:
        return await super().delete(resource_id, cancel=cancel)


class MenusEndpoints(ResourceEndpoints[Menu]):
    """Menus, with their items exposed as the nested ``items`` collection.

    Example:
        >>> entries = await client.menus.items.list({"menus": 3})
    """

    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, MENUS_PATH, Menu)
        self.items = MenuItemsEndpoints(executor)

    async def delete(  # type: ignore[override]
        self,
        resource_id: int,
        cancel: CancellationToken | None = None,
    ) -> Menu:
        return await super().delete(resource_id, cancel=cancel)
