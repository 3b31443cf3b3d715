"""Document renderers."""

from .html import HtmlRenderer, render_html
from .pdf import PdfRenderer

__all__ = ["HtmlRenderer", "PdfRenderer", "render_html"]
