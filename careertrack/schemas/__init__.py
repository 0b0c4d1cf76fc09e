"""
Schemas module - Request/Response schemas for API endpoints.

Request schemas describe what the API accepts (validated at the boundary).
Response schemas describe what it returns; none exposes a password hash.
"""
