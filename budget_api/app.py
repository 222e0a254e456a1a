"""Flask REST API exposing the budget ledger service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from budget_core import config
from budget_core.exceptions import (
    CannotModifyTotalError,
    CapacityExceededError,
    CategoryNotFoundError,
    InvalidRecordError,
    SharesDoNotSumToOneError,
    SharesNotFullySpecifiedError,
    StorageUnavailableError,
    ValidationError,
)
from budget_core.services import BudgetService
from budget_core.storage import LedgerFileStorage

# Exception type -> (HTTP status, error label) for JSON error bodies.
ERROR_RESPONSES: List[Tuple[Type[Exception], int, str]] = [
    (ValidationError, 400, "Validation error"),
    (SharesNotFullySpecifiedError, 400, "Invalid shares"),
    (SharesDoNotSumToOneError, 400, "Invalid shares"),
    (CannotModifyTotalError, 400, "Cannot modify Total"),
    (InvalidRecordError, 400, "Invalid ledger text"),
    (CategoryNotFoundError, 404, "Category not found"),
    (CapacityExceededError, 409, "Capacity exceeded"),
    (StorageUnavailableError, 500, "Storage error"),
]


def _allowed_origins() -> Optional[List[str]]:
    """Origins from BUDGET_LEDGER_ALLOWED_ORIGINS; ``["*"]`` in development."""
    if os.getenv("BUDGET_LEDGER_ENV", "prod").lower() in {"dev", "development"}:
        return ["*"]
    raw = os.getenv("BUDGET_LEDGER_ALLOWED_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or None


def _register_error_handlers(app: Flask) -> None:
    for exc_type, status, label in ERROR_RESPONSES:

        def handler(exc: Exception, status: int = status, label: str = label):
            app.logger.error("%s: %s", label, exc)
            return jsonify({"error": label, "details": str(exc)}), status

        app.register_error_handler(exc_type, handler)


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True) if request.is_json else None
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def create_app(ledger_path: Optional[Path] = None, capacity: Optional[int] = None) -> Flask:
    app = Flask(__name__)
    origins = _allowed_origins()
    if origins is None:
        CORS(app)
    else:
        CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
    _register_error_handlers(app)

    path = Path(ledger_path or config.get_ledger_path())
    service = BudgetService(
        LedgerFileStorage(),
        capacity=capacity if capacity is not None else config.get_capacity(),
        autosave_path=path,
    )
    if path.exists():
        service.load(path)
    app.extensions["budget_service"] = service

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    @app.get("/ledger")
    def get_ledger():
        return _success(service.snapshot())

    @app.get("/ledger/export")
    def export_ledger():
        return Response(service.display(), mimetype="text/plain")

    @app.post("/ledger/import")
    def import_ledger():
        text = request.get_data(as_text=True)
        service.import_text(text)
        return _success(service.snapshot())

    @app.post("/ledger/reset")
    def reset_ledger():
        service.new()
        return _success(service.snapshot())

    @app.post("/ledger/distribute")
    def distribute():
        payload = _json_body()
        service.adjust_total_balance(payload.get("amount"))
        return _success(service.snapshot())

    @app.get("/categories/<int:category_id>")
    def get_category(category_id: int):
        return _success(service.get_category(category_id).to_dict())

    @app.post("/categories")
    def create_category():
        payload = _json_body()
        record = service.add_category(payload.get("name"), payload.get("balance", 0))
        return _success(record.to_dict(), 201)

    @app.post("/categories/<int:category_id>/adjust")
    def adjust_category(category_id: int):
        payload = _json_body()
        record = service.adjust_category_balance(category_id, payload.get("amount"))
        return _success(record.to_dict())

    @app.delete("/categories/<int:category_id>")
    def delete_category(category_id: int):
        service.remove_category(category_id)
        return _success({}, 204)

    @app.put("/shares")
    def update_shares():
        payload = _json_body()
        percentages = payload.get("percentages")
        if not isinstance(percentages, list):
            raise ValidationError("percentages must be a list")
        service.set_shares(percentages)
        return _success(service.snapshot())

    return app
