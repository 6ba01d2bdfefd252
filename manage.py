# manage.py
import sys

from app import create_app
from moodwave.database.db_manager import db


def create_db():
    """Creates the database tables."""
    app = create_app()
    with app.app_context():
        db_uri = app.config['SQLALCHEMY_DATABASE_URI']
        db.create_all()
        print(f"Database tables created at {db_uri}")


def drop_db():
    """Drops every table; used to reset a local development database."""
    app = create_app()
    with app.app_context():
        db.drop_all()
        print("Database tables dropped.")


COMMANDS = {
    'create_db': create_db,
    'drop_db': drop_db,
}


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("No command provided. Usage: python manage.py [create_db|drop_db]")
        return 1
    command = COMMANDS.get(argv[0])
    if command is None:
        print(f"Unknown command: {argv[0]}")
        print("Usage: python manage.py [create_db|drop_db]")
        return 1
    command()
    return 0


if __name__ == '__main__':
    sys.exit(main())
