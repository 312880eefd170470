"""Response types for the WordPress REST API.

Pydantic models for the pagination envelope and light resource shapes.
Resource models only declare the commonly used fields; everything else the
API returns is kept as extra attributes.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Page position of a list response.

    Counts come from the ``X-WP-Total`` and ``X-WP-TotalPages`` headers
    when present.
    """

    total: int = 0
    total_pages: int = 1
    current_page: int = 1
    per_page: int = 10
    has_more: bool = False


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items plus its pagination info."""

    items: list[T]
    pagination: PaginationInfo


class Resource(BaseModel):
    """Base for WordPress resources; unknown fields are preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    links: dict[str, Any] = Field(default_factory=dict, alias="_links")
    embedded: dict[str, Any] | None = Field(None, alias="_embedded")


class Rendered(BaseModel):
    """A field WordPress returns as ``{"rendered": ..., "raw": ...}``."""

    model_config = ConfigDict(extra="allow")

    rendered: str = ""
    raw: str | None = None
    protected: bool | None = None


class Post(Resource):
    id: int = 0
    date: str | None = None
    modified: str | None = None
    slug: str = ""
    status: str = ""
    type: str = ""
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    content: Rendered = Field(default_factory=Rendered)
    excerpt: Rendered = Field(default_factory=Rendered)
    author: int = 0
    featured_media: int = 0
    categories: list[int] = Field(default_factory=list)
    tags: list[int] = Field(default_factory=list)


class Page(Resource):
    id: int = 0
    date: str | None = None
    slug: str = ""
    status: str = ""
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    content: Rendered = Field(default_factory=Rendered)
    author: int = 0
    parent: int = 0
    menu_order: int = 0


class Media(Resource):
    id: int = 0
    date: str | None = None
    slug: str = ""
    title: Rendered = Field(default_factory=Rendered)
    alt_text: str = ""
    media_type: str = ""
    mime_type: str = ""
    source_url: str = ""
    post: int | None = None


class Comment(Resource):
    id: int = 0
    post: int = 0
    parent: int = 0
    author: int = 0
    author_name: str = ""
    date: str | None = None
    content: Rendered = Field(default_factory=Rendered)
    status: str = ""


class Term(Resource):
    """A category or tag."""

    id: int = 0
    count: int = 0
    description: str = ""
    link: str = ""
    name: str = ""
    slug: str = ""
    taxonomy: str = ""
    parent: int | None = None


class User(Resource):
    id: int = 0
    name: str = ""
    slug: str = ""
    url: str = ""
    description: str = ""
    link: str = ""
    email: str | None = None
    roles: list[str] | None = None


class Menu(Resource):
    id: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    locations: list[str] = Field(default_factory=list)
    auto_add: bool = False


class MenuItem(Resource):
    id: int = 0
    title: Rendered = Field(default_factory=Rendered)
    status: str = ""
    url: str = ""
    parent: int = 0
    menu_order: int = 0
    menus: int | None = None
    object: str = ""
    object_id: int = 0
    type: str = ""


class Taxonomy(Resource):
    name: str = ""
    slug: str = ""
    description: str = ""
    types: list[str] = Field(default_factory=list)
    hierarchical: bool = False
    rest_base: str = ""


class PostType(Resource):
    name: str = ""
    slug: str = ""
    description: str = ""
    hierarchical: bool = False
    taxonomies: list[str] = Field(default_factory=list)
    rest_base: str = ""


class PostStatus(Resource):
    name: str = ""
    slug: str = ""
    public: bool = False
    queryable: bool = False
    show_in_list: bool = False


class Settings(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    description: str = ""
    url: str = ""
    email: str | None = None
    timezone: str = ""
    date_format: str = ""
    language: str = ""
    posts_per_page: int = 10


class YoastHead(BaseModel):
    """Response of the Yoast ``get_head`` endpoint."""

    model_config = ConfigDict(extra="allow")

    status: int = 200
    html: str = ""
    json_: dict[str, Any] | None = Field(None, alias="json")
