"""Hotel tenant records for a multi-tenant booking platform, stored with MongoEngine."""

__version__ = '0.1.0'
