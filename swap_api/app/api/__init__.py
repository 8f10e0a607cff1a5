"""
API package containing versioned routes.

A version subpackage exposes a top‑level ``router`` which includes all
of its domain‑specific endpoints.  ``deps`` wires services to the store
held on ``app.state``.
"""
