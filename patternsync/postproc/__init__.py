"""Post-processing of rendered example markup."""

from .html import HtmlPrettifier, prettify_html

__all__ = ["HtmlPrettifier", "prettify_html"]
