"""pdfcrawl - crawl a site and capture each same-origin page as a PDF."""

__version__ = "0.1.0"
