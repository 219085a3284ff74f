"""Movie catalog service: CRUD and JSON-Patch reconciliation for movie records."""

__version__ = "0.1.0"
