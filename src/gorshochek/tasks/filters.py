"""Jinja2 filters and shared formatting helpers for page content."""


def join_tags(tags: list | None) -> str:
    """Join page tags into a comma-separated keyword string.

    Examples:
        >>> join_tags(["index1", "index2"])
        'index1, index2'
        >>> join_tags(None)
        ''
    """
    if not tags:
        return ""
    return ", ".join(str(tag) for tag in tags if tag)


def page_title(page: dict) -> str:
    """Return the page title, falling back to its url.

    Examples:
        >>> page_title({"url": "/a", "title": "A"})
        'A'
        >>> page_title({"url": "/a"})
        '/a'
    """
    return page.get("title") or page.get("url", "")


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "join_tags": join_tags,
    "page_title": page_title,
}
