"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for one table family.
Repositories receive raw rows from the database and return domain model objects.
"""
