"""Content-source adapters that turn publisher listing pages into feeds.

Sub-packages:
- ``config``   — pydantic-settings configuration
- ``core``     — shared collaborators (cache, dates, rendering, dedup, logging)
- ``scraper``  — async httpx fetch helpers
- ``sources``  — one sub-package per publisher adapter
- ``api``      — FastAPI application factory
"""

__version__ = "0.1.0"
