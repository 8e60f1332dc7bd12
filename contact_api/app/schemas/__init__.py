"""
Pydantic schema definitions for API payloads.

Request schemas double as validation rules for the service layer;
read schemas are what the API returns inside the ``data`` envelope.
"""
