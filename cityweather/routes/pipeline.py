from flask import Blueprint, current_app, jsonify, request

from ..logic.city_index import normalize_city
from ..models import PipelineState

pipeline_bp = Blueprint("pipeline", __name__)


@pipeline_bp.route("/api/runs", methods=["POST"])
def start_run():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    city = normalize_city(data) or str(data.get("query") or "").strip()
    if not city:
        return jsonify({"error": "Missing city or query", "status": "fail"}), 400

    controller = current_app.config["PIPELINE"]
    ctx = controller.select(city)

    if ctx.state == PipelineState.ERROR:
        return jsonify({"error": ctx.error, "run": ctx.to_dict(), "status": "fail"}), ctx.status_code

    return jsonify({"result": ctx.result.to_dict(), "run": ctx.to_dict(), "status": "ok"})


@pipeline_bp.route("/api/runs/latest", methods=["GET"])
def latest_run():
    controller = current_app.config["PIPELINE"]
    result = controller.latest_result()
    return jsonify({
        "result": result.to_dict() if result else None,
        "run": controller.status().to_dict(),
        "status": "ok",
    })
