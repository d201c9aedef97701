"""Paginated document model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pageflow.core.markup import to_html
from pageflow.core.nodes import ContentRoot


class PageSize(BaseModel):
    """Physical page size in millimetres."""

    width_mm: float = Field(default=210.0, gt=0)
    height_mm: float = Field(default=297.0, gt=0)


class Page(BaseModel):
    """A single fixed-size page holding one editable content root."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page_number: int = Field(ge=1)
    size: PageSize = Field(default_factory=PageSize)
    content: ContentRoot = Field(default_factory=ContentRoot)

    def renumber(self, page_number: int) -> None:
        self.page_number = page_number
        self.content.page_number = page_number

    @property
    def text(self) -> str:
        return self.content.text_content

    @property
    def html(self) -> str:
        return to_html(self.content)

    @property
    def is_empty(self) -> bool:
        return self.content.is_empty


class Document(BaseModel):
    """Ordered page sequence. Always holds at least one page."""

    pages: list[Page] = Field(min_length=1)

    @property
    def text(self) -> str:
        return "".join(page.text for page in self.pages)

    @property
    def num_pages(self) -> int:
        return len(self.pages)

    @property
    def roots(self) -> list[ContentRoot]:
        return [page.content for page in self.pages]

    def index_of(self, root: ContentRoot) -> int | None:
        for idx, page in enumerate(self.pages):
            if page.content is root:
                return idx
        return None
