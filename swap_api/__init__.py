"""
Top‑level package for the Swap Orders API.

This file makes ``swap_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``swap_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
