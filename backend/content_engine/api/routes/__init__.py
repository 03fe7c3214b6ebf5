"""Route Modules — one file per endpoint.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain prompt or parsing logic (delegate to services/)
"""
