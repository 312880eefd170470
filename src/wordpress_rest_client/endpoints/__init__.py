"""Resource endpoints for the WordPress REST API.

Each module binds a :class:`~wordpress_rest_client.wpapi.RequestExecutor`
to one resource path and response model.
"""

from .base import CrudEndpoints, ResourceEndpoints, SlugEndpoints
from .comments import create_comments_endpoints
from .media import MediaEndpoints
from .menus import MenuItemsEndpoints, MenusEndpoints
from .pages import PagesEndpoints
from .posts import PostsEndpoints
from .registries import (
    create_post_statuses_endpoints,
    create_post_types_endpoints,
    create_taxonomies_endpoints,
)
from .settings import SettingsEndpoints
from .terms import create_categories_endpoints, create_tags_endpoints
from .users import UsersEndpoints
from .yoast import YoastEndpoints

__all__ = [
    "CrudEndpoints",
    "MediaEndpoints",
    "MenuItemsEndpoints",
    "MenusEndpoints",
    "PagesEndpoints",
    "PostsEndpoints",
    "ResourceEndpoints",
    "SettingsEndpoints",
    "SlugEndpoints",
    "UsersEndpoints",
    "YoastEndpoints",
    "create_categories_endpoints",
    "create_comments_endpoints",
    "create_post_statuses_endpoints",
    "create_post_types_endpoints",
    "create_tags_endpoints",
    "create_taxonomies_endpoints",
]
