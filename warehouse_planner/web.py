"""Simple Flask web interface for the warehouse planner."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import Blueprint, Flask, current_app, jsonify, render_template, request

from .calculator import (
    PlanInput,
    PlanResult,
    coerce_plan_input,
    compute_plan,
    equipment_names,
)
from .config import Settings
from .errors import NoSavedPlanError, PlannerError, PreviewTooLargeError
from .logging_config import configure_logging, get_logger
from .scene import SceneSpec, render_html
from .storage import PlanStore

logger = get_logger(__name__)

bp = Blueprint("planner", __name__)

DEFAULT_PLAN = PlanInput(
    building_length=200,
    building_width=100,
    ceiling_height=30,
    pallet_width=40,
    pallet_depth=48,
    pallets_per_level=2,
    rack_beam_length=96,
    rack_depth=48,
    equipment_type="Reach Truck",
)

# (field, label) in form order; equipment_type is rendered as a select.
_NUMERIC_INPUTS: Tuple[Tuple[str, str], ...] = (
    ("building_length", "Building length (ft)"),
    ("building_width", "Building width (ft)"),
    ("ceiling_height", "Ceiling height (ft)"),
    ("pallet_width", "Pallet width (in)"),
    ("pallet_depth", "Pallet depth (in)"),
    ("pallets_per_level", "Pallets per level"),
    ("rack_beam_length", "Rack beam length (in)"),
    ("rack_depth", "Rack depth (in)"),
)


def create_app(settings: Settings | None = None) -> Flask:
    """Build the web app; settings default to the environment."""

    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.log_level, format_json=settings.log_json)
    app = Flask(__name__)
    app.config["PLAN_STORE_PATH"] = settings.store_path
    app.config["PLAN_SLOT"] = settings.slot
    app.register_blueprint(bp)
    return app


def _store() -> PlanStore:
    return PlanStore(current_app.config["PLAN_STORE_PATH"], current_app.config["PLAN_SLOT"])


def _format_field(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _form_from_plan(plan: PlanInput) -> Dict[str, str]:
    return {key: _format_field(value) for key, value in plan.to_dict().items()}


@bp.route("/", methods=["GET", "POST"])
def index():
    form_values = _form_from_plan(DEFAULT_PLAN)
    error: str | None = None
    message: str | None = None
    result: PlanResult | None = None
    scene_html: str | None = None
    preview_note: str | None = None

    if request.method == "POST":
        form_values.update(request.form)
        action = form_values.pop("action", "calculate")
        try:
            if action == "save":
                _store().save(coerce_plan_input(form_values, DEFAULT_PLAN))
                message = "Plan saved!"
            elif action == "load":
                try:
                    form_values = _form_from_plan(_store().load())
                    message = "Plan loaded!"
                except NoSavedPlanError as exc:
                    message = str(exc)
        except (PlannerError, OSError) as exc:
            logger.warning("plan store failure", action=action, error=str(exc))
            error = str(exc)

    try:
        result = compute_plan(coerce_plan_input(form_values, DEFAULT_PLAN))
    except PlannerError as exc:
        error = error or str(exc)
    else:
        try:
            scene_html = render_html(SceneSpec.from_result(result))
        except PreviewTooLargeError as exc:
            preview_note = str(exc)

    return render_template(
        "index.html",
        form=form_values,
        numeric_inputs=_NUMERIC_INPUTS,
        equipment_options=equipment_names(),
        result=result,
        scene_html=scene_html,
        preview_note=preview_note,
        message=message,
        error=error,
    )


@bp.route("/api/plan", methods=["POST"])
def api_plan():
    raw: Any = request.get_json(silent=True)
    if not isinstance(raw, dict):
        return jsonify({"error": "Request body must be a JSON object."}), 400
    try:
        result = compute_plan(PlanInput.from_dict(raw))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(result.to_dict())


if __name__ == "__main__":
    create_app().run(debug=True)
