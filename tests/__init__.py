# tests/__init__.py
"""
Test suite for core_store.

Organization:
- `db`: ORM models, timestamps, database-level constraints, schema contract.
- `repositories`: data-access classes against an in-memory SQLite database.
- `services`: invariants, error translation and transaction handling.
"""
