"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (users, products, swap orders) exposes a
router defined in ``api/v1/endpoints``, a service in ``services`` and
its pydantic schemas in ``schemas``.  Persistence is isolated in
``repositories`` so that the MongoDB backend can be swapped for the
in‑memory one in tests.
"""

from .main import app  # noqa: F401
