"""Test suite for the ERP account lifecycle service.

Test structure follows the test pyramid:
- unit/: Unit tests - domain rules and the manager over in-memory fakes
- integration/: Integration tests - SQLAlchemy adapters against SQLite
- api/: API endpoint tests - HTTP binding through the FastAPI TestClient
"""
