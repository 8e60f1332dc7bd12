"""
API package containing the HTTP routes.

``router`` in ``router.py`` bundles the routers defined in
``endpoints``.
"""
