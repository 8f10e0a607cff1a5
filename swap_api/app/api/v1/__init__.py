"""
Version 1 of the API.

Bundles the user, product and swap order endpoints.  Breaking changes
belong in a new version subpackage.
"""
