#!/usr/bin/env python
"""Authentication utilities and Flask-Login integration."""

from __future__ import annotations

from flask import jsonify
from flask_login import LoginManager

from moodwave.errors import Unauthorized

login_manager = LoginManager()
login_manager.session_protection = "strong"
login_manager.login_message = None


def init_auth(app):
    """Attach Flask-Login to the Flask app; the session cookie carries the signed token."""
    from moodwave.database.db_manager import User, db

    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str) -> User | None:
        try:
            user = db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None
        if user is None or not user.is_active:
            return None
        return user

    @login_manager.unauthorized_handler
    def _unauthorized():
        return jsonify(Unauthorized().to_dict()), 401

    return login_manager


__all__ = ["login_manager", "init_auth"]
