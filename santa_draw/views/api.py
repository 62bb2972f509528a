from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView

from ..extensions import csrf
from ..policies import AssignmentConflictError, AssignmentValidationError, StorageError
from ..santa import DerangementError
from ..services import AssignmentStore


RESET_MESSAGE = "New draw created and saved."
RESET_REPEATED_MESSAGE = "New draw created, but it is the same as the previous one."
IMPORT_MESSAGE = "Assignment imported and saved on the server."


class StoreView(MethodView):
    init_every_request = False

    def __init__(self, store: AssignmentStore):
        self.store = store


class AssignmentsView(StoreView):
    def get(self):
        # Never draws on read
        current = self.store.get()
        if current is None:
            current_app.logger.info("No assignments stored; not creating one on GET")
            return "", 204
        return jsonify(assignments=current, created=False)


class ResetView(StoreView):
    def post(self):
        result = self.store.reset()
        current_app.logger.info("Reset: new assignments saved")
        message = RESET_REPEATED_MESSAGE if result.repeated else RESET_MESSAGE
        return jsonify(assignments=result.assignments, message=message, repeated=result.repeated)


class ImportView(StoreView):
    def post(self):
        payload = request.get_json(silent=True)
        candidate = payload.get("assignments") if isinstance(payload, dict) else None
        if candidate is None:
            raise AssignmentValidationError("Invalid payload.")

        assignments = self.store.import_assignment(candidate)
        current_app.logger.info("Imported assignments from client")
        return jsonify(assignments=assignments, message=IMPORT_MESSAGE), 201


class LookupView(StoreView):
    def get(self, name: str):
        name = name.strip().lower()
        if name not in self.store.participants:
            return jsonify(error=f"Unknown participant: {name}"), 404

        current = self.store.get()
        if current is None:
            return "", 204
        return jsonify(giver=name, recipient=current[name])


def create_api_blueprint(store: AssignmentStore) -> Blueprint:
    bp = Blueprint("api", __name__, url_prefix="/api")
    csrf.exempt(bp)

    bp.add_url_rule("/assignments", view_func=AssignmentsView.as_view("assignments", store), methods=["GET"])
    bp.add_url_rule("/assignments/reset", view_func=ResetView.as_view("reset", store), methods=["POST"])
    bp.add_url_rule("/assignments/import", view_func=ImportView.as_view("import", store), methods=["POST"])
    bp.add_url_rule("/assignments/<name>", view_func=LookupView.as_view("lookup", store), methods=["GET"])

    @bp.errorhandler(AssignmentValidationError)
    def handle_invalid(e):
        current_app.logger.info("Rejected assignment: %s", e)
        return jsonify(error=str(e)), 400

    @bp.errorhandler(AssignmentConflictError)
    def handle_conflict(e):
        return jsonify(error="The server already holds an assignment.", assignments=e.existing), 409

    @bp.errorhandler(StorageError)
    @bp.errorhandler(DerangementError)
    def handle_failure(e):
        current_app.logger.error("Assignment storage failed: %s", e)
        return jsonify(error=str(e)), 500

    return bp
