"""
Order Service

Purchase order lifecycle management.

Features:
- Order creation with request validation
- Retrieval by id and paginated listing filtered by status
- Full replacement and status changes
- Explicit not-found semantics on every mutation
"""

__version__ = "1.0.0"
