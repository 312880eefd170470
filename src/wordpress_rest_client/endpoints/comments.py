"""Comments endpoints (``/wp/v2/comments``)."""

from ..wpapi import RequestExecutor
from ..wpapi.types import Comment
from .base import ResourceEndpoints

BASE_PATH = "/wp/v2/comments"


def create_comments_endpoints(executor: RequestExecutor) -> ResourceEndpoints[Comment]:
    return ResourceEndpoints(executor, BASE_PATH, Comment)
