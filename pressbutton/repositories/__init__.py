"""
Store interface used by the services.

Each module exposes plain async functions that take an ``AsyncSession``
first. Nothing here commits; transaction boundaries belong to the caller
(see ``pressbutton.database.transaction``).
"""
