"""
Service layer.

Each service encapsulates the business logic of one domain and works
against an injected ``DocumentStore``.  ``IntegrityService`` owns the
rules that tie swap orders to users and products: reference checks,
cascading deletes and reference expansion.
"""
