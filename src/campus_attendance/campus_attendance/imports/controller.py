from __future__ import annotations

import json
import logging
from functools import wraps

from flask import Flask, Response, jsonify, request, session

from ..core.enums import EntityType, Role
from ..core.exceptions import ImportPreconditionError, StoreUnavailableError, ValidationError
from ..container import Container
from .samples import sample_csv, sample_filename
from .service import Actor

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please log in first"}), 401

            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "Admin access required"}), 403

            return view(*args, **kwargs)

        return wrapper

    def _entity_or_none(value: str):
        try:
            return EntityType(value)
        except ValueError:
            return None

    def _read_upload() -> str:
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("Please choose a CSV file to upload")
        if not upload.filename.lower().endswith(".csv"):
            raise ValidationError("Please upload a .csv file")
        try:
            return upload.read().decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError("CSV file must be UTF-8 encoded")

    def _read_mapping():
        raw = request.form.get("mapping")
        if not raw:
            return None
        try:
            mapping = json.loads(raw)
        except ValueError:
            raise ValidationError("Column mapping must be a JSON object")
        if not isinstance(mapping, dict):
            raise ValidationError("Column mapping must be a JSON object")
        return mapping

    def _read_faculty_id():
        raw = (request.form.get("faculty_id") or "").strip()
        if not raw:
            return None
        if not raw.isdigit():
            raise ValidationError("Invalid faculty id")
        return int(raw)

    @app.route("/admin/import/<entity_type>", methods=["POST"], endpoint="admin_import")
    @admin_required
    def admin_import(entity_type: str):
        entity = _entity_or_none(entity_type)
        if entity is None:
            return jsonify({"success": False, "message": f"Unknown import type '{entity_type}'"}), 404

        try:
            result = container.import_service.import_file(
                entity,
                _read_upload(),
                mapping=_read_mapping(),
                faculty_id=_read_faculty_id(),
                actor=Actor(user_id=str(session["user_id"]), role=Role(session["role"])),
            )
        except (ImportPreconditionError, ValidationError) as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreUnavailableError:
            logger.exception("%s import failed: database unavailable", entity.value)
            return jsonify({"success": False, "message": "Database is unavailable, please try again later"}), 503
        except Exception:
            logger.exception("%s import failed", entity.value)
            return jsonify({"success": False, "message": "Unexpected error while importing the file"}), 500

        return jsonify(result.to_dict()), 200

    @app.route("/admin/import/<entity_type>/sample", methods=["GET"], endpoint="admin_import_sample")
    @admin_required
    def admin_import_sample(entity_type: str):
        entity = _entity_or_none(entity_type)
        if entity is None:
            return jsonify({"success": False, "message": f"Unknown import type '{entity_type}'"}), 404

        return Response(
            sample_csv(entity),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={sample_filename(entity)}"},
        )
