"""
database: ORM models, the async session factory, owner-scoped stores.
"""
