"""schemaviz: a database schema model with SQL, Prisma and JSON converters."""

__version__ = "0.1.0"
