import os
import sqlite3
from urllib.parse import quote_plus

import pandas as pd
from sqlalchemy import event, text
from sqlalchemy.engine import Engine

POOL_SIZE = 10


def database_uri():
    """ Work out the store URI from the environment, Heroku style first. """

    uri = os.getenv("DATABASE_URL")
    if uri:
        if uri.startswith("postgres://"):
            uri = uri.replace("postgres://", "postgresql://", 1)
        return uri

    host = os.getenv("DB_HOST")
    name = os.getenv("DB_NAME")
    missing = [var for var, value in (("DB_HOST", host), ("DB_NAME", name)) if not value]
    if missing:
        raise RuntimeError("Set DATABASE_URL or " + ", ".join(missing))

    user = os.getenv("DB_USER", "")
    password = os.getenv("DB_PASSWORD")
    credentials = quote_plus(user)
    if password:
        credentials += ":" + quote_plus(password)
    if credentials:
        credentials += "@"

    return "postgresql://{}{}/{}".format(credentials, host, name)


def engine_options(uri):
    """ A bounded pool where extra requests wait for a free connection. SQLite manages its own. """
    if uri.startswith("sqlite"):
        return {}
    return {"pool_size": POOL_SIZE, "max_overflow": 0, "pool_timeout": None}


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked on every connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def query_db(db, query, params=None, one=False):
    rv = db.session.execute(text(query), params or {}).mappings().all()
    return (rv[0] if rv else None) if one else rv


def df_query_db(db, query, params=None):
    return pd.read_sql(text(query), con=db.session.connection(), params=params)


def is_unique_violation(error, column):
    """ True if an IntegrityError was raised by the unique constraint on the given column. """
    message = str(error.orig).lower()
    return column in message and ("unique" in message or "duplicate" in message)
