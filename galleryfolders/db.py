from peewee import Database, DatabaseProxy
from playhouse.db_url import connect

from galleryfolders.config import get_settings

db = DatabaseProxy()


def initialize_db(database: Database | str | None = None) -> Database:
    """
    Bind the metadata models to a database, given either as an existing peewee database or as a
    db_url (default: the database_url setting)
    """
    if database is None:
        database = get_settings().database_url
    if isinstance(database, str):
        database = connect(database)
    db.initialize(database)
    return database


def initialize_if_needed():
    from galleryfolders.metadata import FolderMetadata

    db.create_tables([FolderMetadata], safe=True)


def close_db():
    if db.obj is not None and not db.is_closed():
        db.close()
