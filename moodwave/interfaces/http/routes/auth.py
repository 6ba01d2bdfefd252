#!/usr/bin/env python
"""Account endpoints: registration, login, logout and session checks."""

from __future__ import annotations

import re
from typing import Dict, Tuple

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy import func, or_

from moodwave.database.db_manager import User, db


auth_bp = Blueprint("auth", __name__, url_prefix="/user")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,40}$")


def _validate_registration(payload: Dict[str, str]) -> Tuple[Dict[str, str], Dict[str, str]]:
    fields = {
        "name": (payload.get("name") or "").strip(),
        "username": (payload.get("username") or "").strip(),
        "email": (payload.get("email") or "").strip().lower(),
        "password": (payload.get("password") or "").strip(),
    }
    errors: Dict[str, str] = {}
    if not _USERNAME_RE.match(fields["username"]):
        errors["username"] = "Username must be 3-40 letters, digits, dots, dashes or underscores."
    if not fields["email"] or not _EMAIL_RE.match(fields["email"]):
        errors["email"] = "Please provide a valid email address."
    if len(fields["password"]) < 8:
        errors["password"] = "Password must be at least 8 characters long."
    return fields, errors


def _find_by_identifier(identifier: str) -> User | None:
    identifier = identifier.strip()
    if not identifier:
        return None
    return User.query.filter(
        or_(User.email == identifier.lower(), func.lower(User.username) == identifier.lower())
    ).first()


@auth_bp.route("/register", methods=["POST"])
def register_user():
    data = request.get_json(silent=True) or {}
    fields, errors = _validate_registration(data)
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    if User.query.filter_by(email=fields["email"]).first():
        return jsonify({"success": False, "errors": {"email": "An account with this email already exists."}}), 409
    if User.query.filter(func.lower(User.username) == fields["username"].lower()).first():
        return jsonify({"success": False, "errors": {"username": "This username is already taken."}}), 409

    user = User(
        name=fields["name"] or fields["username"],
        username=fields["username"],
        email=fields["email"],
    )
    user.set_password(fields["password"])
    db.session.add(user)
    db.session.commit()

    login_user(user)
    return jsonify({"success": True, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    identifier = (data.get("email") or data.get("username") or "").strip()
    password = (data.get("password") or "").strip()

    if not identifier or not password:
        return jsonify({"success": False, "errors": {"form": "Email and password are required."}}), 400

    user = _find_by_identifier(identifier)
    if user is None or not user.check_password(password):
        return jsonify({"success": False, "errors": {"form": "Invalid email or password."}}), 401

    if not user.is_active:
        return jsonify({"success": False, "errors": {"form": "Account is disabled."}}), 403

    login_user(user, remember=bool(data.get("remember")))
    return jsonify({"success": True, "user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    if current_user.is_authenticated:
        logout_user()
    return jsonify({"success": True}), 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify({"success": True, "user": {"name": current_user.name, "username": current_user.username}}), 200


@auth_bp.route("/checkauth", methods=["GET"])
def check_auth():
    if current_user.is_authenticated:
        return jsonify({"authenticated": True, "user": current_user.to_dict()}), 200
    return jsonify({"authenticated": False, "user": None}), 200


@auth_bp.route("/check", methods=["POST"])
def check_user_existence():
    data = request.get_json(silent=True) or {}
    identifier = (data.get("email") or data.get("username") or "").strip()
    if not identifier:
        return jsonify({"errors": {"form": "Email or username is required."}}), 400
    return jsonify({"exists": _find_by_identifier(identifier) is not None}), 200


@auth_bp.route("/update", methods=["POST"])
@login_required
def update_password():
    data = request.get_json(silent=True) or {}
    current_password = (data.get("current_password") or "").strip()
    new_password = (data.get("new_password") or "").strip()

    errors: Dict[str, str] = {}
    if not current_password:
        errors["current_password"] = "Current password is required."
    if len(new_password) < 8:
        errors["new_password"] = "New password must be at least 8 characters long."
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    if not current_user.check_password(current_password):
        return jsonify({"success": False, "errors": {"current_password": "Current password is incorrect."}}), 403

    current_user.set_password(new_password)
    db.session.commit()
    return jsonify({"success": True}), 200


__all__ = ["auth_bp"]
