"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema bootstrap and fixture seeding.
Only seed.py reaches up into the service layer.
"""
