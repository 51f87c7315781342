import mongoengine # Import the MongoEngine library used to define models and manage MongoDB connections.

from hotel_registry.infrastructure.settings import settings

"""
Initialize MongoEngine and register the application's default connection.

- Registers the connection alias 'core' (settings.DB_ALIAS) pointing at
    settings.DATABASE_NAME on settings.MONGO_URI, unless overridden.
- Extra keyword arguments go to the client, e.g.
    mongo_client_class=mongomock.MongoClient for an in-memory database.
- Call this once during application startup before using models that
    specify `meta = {'db_alias': 'core'}` so they bind to this connection.
"""
def global_init(db_name=None, host=None, **client_kwargs):
    mongoengine.register_connection(
        alias=settings.DB_ALIAS,
        name=db_name or settings.DATABASE_NAME,
        host=host or settings.MONGO_URI,
        **client_kwargs
    )


"""Drop the 'core' connection so the next global_init() starts fresh."""
def global_close():
    mongoengine.disconnect(alias=settings.DB_ALIAS)
