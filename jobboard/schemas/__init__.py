"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: SQLAlchemy tables
- Schemas: API contract (what client sends/receives)
"""
