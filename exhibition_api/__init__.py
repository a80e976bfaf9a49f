"""
Top‑level package for the Exhibition Registry API.

This file makes ``exhibition_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``exhibition_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
