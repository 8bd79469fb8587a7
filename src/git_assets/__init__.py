"""
git-assets: content-addressed storage for large binary files in git.

Large payloads are replaced in history by small, stable references while
the bytes themselves live in a local store keyed by their SHA-256 hash.
"""

__version__ = "0.3.0"
