"""
Service layer.

Each service validates its input, performs the store operation and
raises typed errors from ``core.errors``.  Endpoints only translate
HTTP to service calls.
"""
