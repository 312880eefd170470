"""Category and tag endpoints (``/wp/v2/categories``, ``/wp/v2/tags``).

Both collections hold taxonomy terms and share one response model.
"""

from ..wpapi import RequestExecutor
from ..wpapi.types import Term
from .base import ResourceEndpoints

CATEGORIES_PATH = "/wp/v2/categories"
TAGS_PATH = "/wp/v2/tags"


def create_categories_endpoints(executor: RequestExecutor) -> ResourceEndpoints[Term]:
    return ResourceEndpoints(executor, CATEGORIES_PATH, Term)


def create_tags_endpoints(executor: RequestExecutor) -> ResourceEndpoints[Term]:
    return ResourceEndpoints(executor, TAGS_PATH, Term)
