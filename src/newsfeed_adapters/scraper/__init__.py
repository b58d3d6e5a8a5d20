"""Upstream HTTP access shared by the source adapters.

Sub-modules:
- ``config``        — default timeout and binary content-type prefixes
- ``http_fetcher``  — async httpx-based fetch helpers raising ``FetchError``
"""
