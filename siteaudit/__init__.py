"""Website audit service: scores a page for performance, SEO, accessibility and crawlability."""

__version__ = "0.1.0"
