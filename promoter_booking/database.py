"""Database configuration and initialization."""
from sqlalchemy import BigInteger, Integer, create_engine, event
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base

# Create SQLAlchemy base
Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), 'sqlite')

# Global session, factory and engine
engine = None
session_factory = None
db_session = None


def _build_engine(database_uri: str, echo: bool = False):
    """Create the engine with pool settings suited to the backend."""
    if database_uri.startswith('sqlite'):
        sqlite_engine = create_engine(
            database_uri,
            echo=echo,
            connect_args={'check_same_thread': False}
        )

        @event.listens_for(sqlite_engine, 'connect')
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()

        return sqlite_engine

    return create_engine(
        database_uri,
        echo=echo,
        pool_pre_ping=True,  # Enable connection health checks
        pool_size=10,
        max_overflow=20
    )


def init_db(app):
    """Initialize database connection."""
    global engine, session_factory, db_session

    engine = _build_engine(
        app.config['SQLALCHEMY_DATABASE_URI'],
        echo=app.config.get('SQLALCHEMY_ECHO', False)
    )

    session_factory = sessionmaker(autoflush=False, bind=engine)
    db_session = scoped_session(session_factory)

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            db_session.rollback()
        db_session.remove()


def create_all():
    """Create every table known to the models package."""
    import promoter_booking.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_all():
    """Drop every table known to the models package."""
    import promoter_booking.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)


def get_session():
    """Get database session."""
    return db_session


def get_session_factory():
    """Get the session factory (one independent session per call)."""
    return session_factory
