from __future__ import annotations

import json
import logging
from typing import Any

from flask import Flask, Response, jsonify, request

from ..auth.service import AuthError, AuthService, InvalidCredentialsError
from ..auth.store import InMemoryUserStore, UserStore
from ..config.loader import AppConfig
from ..entry.session import EntrySession, EntrySessionError
from ..ingest.reader import UploadRejectedError
from ..ingest.schema import DatasetKind
from ..ingest.validator import summarize_errors
from ..models.manual_entry import ENTRY_FIELDS
from ..models.uploaded_file import UploadedFile
from ..services.dashboard import export_filename, filter_top_products, sample_dashboard
from ..services.submission import SimulatedSubmitter, SubmissionError, Submitter
from ..services.templates import template_csv, template_filename
from ..services.upload_session import UploadBlockedError, UploadSession

"""Flask application: authentication API plus upload / entry / dashboard endpoints.

Upload and entry state is held in one UploadSession / EntrySession per app
instance (single-user demo; nothing is persisted).
"""

logger = logging.getLogger(__name__)

__all__ = [
    "create_app",
]


def _json_object() -> dict[str, Any] | None:
    """Request JSON body as a dict; None when the body is not a JSON object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _upload_payload(uploaded: UploadedFile, limit: int) -> dict[str, Any]:
    return {
        "id": uploaded.id,
        "file": uploaded.name,
        "size": uploaded.size,
        "kind": uploaded.kind,
        "status": uploaded.status.value,
        "progress": uploaded.progress,
        "error": uploaded.error,
        "headers": uploaded.headers,
        "rows": [r.values for r in uploaded.rows],
        "errors": [e.to_dict() for e in uploaded.errors],
        "error_summary": summarize_errors(uploaded.errors, limit),
        "can_confirm": uploaded.can_confirm,
    }


def create_app(
    config: AppConfig | None = None,
    user_store: UserStore | None = None,
    submitter: Submitter | None = None,
) -> Flask:
    app = Flask(__name__)
    config = config or AppConfig(source_directory=".")
    submitter = submitter or SimulatedSubmitter(delay_seconds=config.submission_delay_seconds)
    auth = AuthService(user_store or InMemoryUserStore(), hash_method=config.hash_method)
    uploads = UploadSession(
        submitter, max_bytes=config.max_upload_bytes, strategy=config.inference  # type: ignore[arg-type]
    )
    entries = EntrySession(submitter)
    app.extensions["bizdash"] = {"auth": auth, "uploads": uploads, "entries": entries}

    # --- authentication -------------------------------------------------

    @app.route("/signup", methods=["POST"])
    def signup():
        body = _json_object()
        if body is None:
            return jsonify({"message": "Request body must be a JSON object"}), 400
        try:
            user = auth.signup(body.get("name"), body.get("email"), body.get("password"))
        except AuthError as e:
            # EmailInUseError / MissingFieldsError
            return jsonify({"message": str(e)}), 400
        except Exception as e:
            logger.error(f"signup failed: {e}")
            return jsonify({"message": "Signup failed", "error": str(e)}), 500
        return jsonify(user), 201

    @app.route("/login", methods=["POST"])
    def login():
        body = _json_object()
        if body is None:
            return jsonify({"message": "Request body must be a JSON object"}), 400
        try:
            user = auth.login(body.get("email"), body.get("password"))
        except InvalidCredentialsError as e:
            return jsonify({"message": str(e)}), 401
        except Exception as e:
            logger.error(f"login failed: {e}")
            return jsonify({"message": "Login failed", "error": str(e)}), 500
        return jsonify(user), 200

    # --- uploads ----------------------------------------------------------

    @app.route("/api/uploads", methods=["POST"])
    def upload_file():
        if "file" not in request.files:
            return jsonify({"message": "No file uploaded"}), 400
        f = request.files["file"]
        kind = request.form.get("kind") or None
        if kind is not None and kind not in {k.value for k in DatasetKind}:
            return jsonify({"message": f"Unknown dataset kind: {kind}"}), 400
        try:
            uploaded = uploads.add(f.filename or "", f.read(), kind=kind)
        except UploadRejectedError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(_upload_payload(uploaded, config.error_display_limit)), 200

    @app.route("/api/uploads/<file_id>/confirm", methods=["POST"])
    def confirm_upload(file_id: str):
        try:
            uploaded = uploads.confirm(file_id)
        except KeyError:
            return jsonify({"message": "Upload not found"}), 404
        except UploadBlockedError as e:
            return jsonify({"message": str(e)}), 409
        status = 200 if uploaded.error is None else 502
        return jsonify(_upload_payload(uploaded, config.error_display_limit)), status

    @app.route("/api/uploads/<file_id>/rows", methods=["GET"])
    def preview_upload(file_id: str):
        try:
            rows = uploads.preview(file_id, request.args.get("q", ""))
        except KeyError:
            return jsonify({"message": "Upload not found"}), 404
        return jsonify([r.values for r in rows])

    @app.route("/api/uploads/<file_id>", methods=["DELETE"])
    def remove_upload(file_id: str):
        try:
            uploads.remove(file_id)
        except KeyError:
            return jsonify({"message": "Upload not found"}), 404
        return jsonify({"success": True})

    # --- manual entry -----------------------------------------------------

    @app.route("/api/entries", methods=["GET"])
    def list_entries():
        return jsonify([r.to_dict() for r in entries.pending])

    @app.route("/api/entries", methods=["POST"])
    def add_entry():
        body = _json_object()
        if body is None:
            return jsonify({"message": "Request body must be a JSON object"}), 400
        # reject the whole request before touching the draft
        unknown = [field for field in body if field not in ENTRY_FIELDS]
        if unknown:
            return jsonify({"message": f"unknown field: {unknown[0]}"}), 400
        # each request is a complete form; nothing carries over from earlier ones
        entries.reset_draft()
        for field, value in body.items():
            entries.update(field, "" if value is None else str(value))
        errors = entries.submit()
        if errors:
            return jsonify({"message": "Please fix the errors before submitting", "errors": errors}), 400
        return jsonify({"pending": len(entries.pending)}), 201

    @app.route("/api/entries/<int:index>", methods=["DELETE"])
    def remove_entry(index: int):
        try:
            entries.remove(index)
        except EntrySessionError as e:
            return jsonify({"message": str(e)}), 404
        return jsonify({"pending": len(entries.pending)})

    @app.route("/api/entries/save", methods=["POST"])
    def save_entries():
        try:
            ack = entries.save_all()
        except EntrySessionError as e:
            return jsonify({"message": str(e)}), 400
        except SubmissionError as e:
            return jsonify({"message": "Failed to save entries", "error": str(e)}), 502
        return jsonify({"saved": ack.accepted, "submitted_at": ack.submitted_at.isoformat()})

    # --- templates / dashboard -------------------------------------------

    @app.route("/api/templates/<kind>", methods=["GET"])
    def download_template(kind: str):
        try:
            dataset_kind = DatasetKind(kind)
        except ValueError:
            return jsonify({"message": f"Unknown dataset kind: {kind}"}), 404
        return Response(
            template_csv(dataset_kind),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={template_filename(dataset_kind)}"},
        )

    @app.route("/api/dashboard/export", methods=["GET"])
    def export_dashboard():
        return Response(
            json.dumps(sample_dashboard(), indent=2, ensure_ascii=False),
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
        )

    @app.route("/api/dashboard/products", methods=["GET"])
    def top_products():
        return jsonify(
            filter_top_products(
                sample_dashboard()["topProducts"],
                search=request.args.get("search", ""),
                category=request.args.get("category", "all"),
            )
        )

    return app
