from flask import Blueprint, current_app, jsonify, request

from ..logic.city_index import search_cities

cities_bp = Blueprint("cities", __name__)


@cities_bp.route("/api/cities", methods=["GET"])
def city_search():
    city_error = current_app.config.get("CITY_ERROR")
    if city_error:
        return jsonify({"error": city_error, "status": "fail"}), 503

    query = request.args.get("q", "")
    matches = search_cities(query, current_app.config["CITY_INDEX"])
    return jsonify({"results": [c.to_dict() for c in matches], "status": "ok"})
