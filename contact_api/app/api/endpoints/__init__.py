"""
Endpoint subpackage.

Each module defines an APIRouter for one domain (users, contacts).
The routers are aggregated in ``api/router.py``.
"""
