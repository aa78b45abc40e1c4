"""Page record schema.

Pages travel through the pipeline as plain dicts so that tasks can attach
arbitrary fields. This schema is applied at the I/O boundary to reject pages
that the model cannot key, and to document the well-known fields.
"""

from pydantic import BaseModel, Field


class PageRecord(BaseModel):
    """A single page of the documentation site.

    Attributes:
        url: Site URL of the page, unique within a model
        content_file: Path of the page content, relative to the cache directory
        source_url: Location of the page source (local path or http(s) URL)
        aliases: Alternative URLs that redirect to this page
        view: Name of the view used to render the page
        published: Whether the page is part of the published site
        title: Page title
        tags: Page keywords
        header: Header fields generated by the header tasks
        meta: Search metadata generated by the search meta task
    """

    model_config = {"extra": "allow", "populate_by_name": True}

    url: str = Field(min_length=1)
    content_file: str | None = Field(default=None, alias="contentFile")
    source_url: str | None = Field(default=None, alias="sourceUrl")
    aliases: list[str] | None = None
    view: str | None = None
    published: bool | None = None
    title: str | None = None
    tags: list[str] | None = None
    header: dict | None = None
    meta: dict | None = None


def validate_page(data: dict) -> dict:
    """Validate a raw page and return a shallow copy of it.

    Values are returned exactly as given so that merge compares what the
    model file says, not what the schema coerced it into.

    Raises:
        pydantic.ValidationError: If the page does not match the schema
    """
    PageRecord.model_validate(data)
    return dict(data)
