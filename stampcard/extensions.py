"""
Flask extensions initialization.
"""
import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Database
db = SQLAlchemy()

# Migrations
migrate = Migrate()


# SQLite (dev and tests): let SQLAlchemy own transaction boundaries and take the
# write lock up front. With pysqlite's deferred BEGIN, two sessions that both
# read before writing can deadlock and fail with "database is locked".
@event.listens_for(Engine, 'connect')
def _configure_sqlite_connection(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


@event.listens_for(Engine, 'begin')
def _begin_sqlite_immediate(conn):
    if conn.dialect.name == 'sqlite':
        conn.exec_driver_sql('BEGIN IMMEDIATE')
