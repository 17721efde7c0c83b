"""Full HTML documents wrapping rendered views."""

from html import escape

from blogstage.config import SiteConfig
from blogstage.core.bio import AuthorBio
from blogstage.core.index import index_page_path


def render_document(
    site: SiteConfig,
    body: str,
    *,
    page_title: str | None = None,
    blog_root: str = "/",
    bio: AuthorBio | None = None,
) -> str:
    """Wrap an HTML fragment in the site layout.

    Args:
        site: Site metadata (title, description, author)
        body: Rendered view fragment
        page_title: Title prefix for the document <title>
        blog_root: Root URL path of the blog, linked from the header
        bio: Author bio appended after the body

    Returns:
        Complete HTML document
    """
    title = f"{page_title} - {site.title}" if page_title else site.title
    head = [
        '<meta charset="utf-8"/>',
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>',
        f"<title>{escape(title)}</title>",
    ]
    if site.description is not None:
        head.append(f'<meta name="description" content="{escape(site.description)}"/>')
    if site.author is not None:
        head.append(f'<meta name="author" content="{escape(site.author)}"/>')

    root_href = index_page_path(blog_root, 1)
    footer = f"<footer>{bio.to_html()}</footer>" if bio is not None else ""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">'
        f"<head>{''.join(head)}</head>"
        "<body>"
        f'<header><a href="{escape(root_href)}">{escape(site.title)}</a></header>'
        f"<main>{body}</main>"
        f"{footer}"
        "</body>"
        "</html>\n"
    )
