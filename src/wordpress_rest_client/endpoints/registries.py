"""Slug-keyed registries: taxonomies, post types and post statuses."""

from ..wpapi import RequestExecutor
from ..wpapi.types import PostStatus, PostType, Taxonomy
from .base import SlugEndpoints

TAXONOMIES_PATH = "/wp/v2/taxonomies"
POST_TYPES_PATH = "/wp/v2/types"
POST_STATUSES_PATH = "/wp/v2/statuses"


def create_taxonomies_endpoints(executor: RequestExecutor) -> SlugEndpoints[Taxonomy]:
    return SlugEndpoints(executor, TAXONOMIES_PATH, Taxonomy)


def create_post_types_endpoints(executor: RequestExecutor) -> SlugEndpoints[PostType]:
    return SlugEndpoints(executor, POST_TYPES_PATH, PostType)


def create_post_statuses_endpoints(
    executor: RequestExecutor,
) -> SlugEndpoints[PostStatus]:
    return SlugEndpoints(executor, POST_STATUSES_PATH, PostStatus)
