"""Remote content providers.

ConfluenceContentProvider implements IContentProvider: it turns a Confluence
page URL into a title plus plain body text via the REST content API.
"""

from src.providers.content.confluence_provider import ConfluenceContentProvider

__all__ = ["ConfluenceContentProvider"]
