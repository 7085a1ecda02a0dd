import platform

from flask import Blueprint, jsonify

from .. import config

env_bp = Blueprint("env", __name__)


def mask_key(key):
    if not key:
        return None
    return f"{key[:6]}…{key[-4:]} (len={len(key)})"


@env_bp.route("/api/env-check", methods=["GET"])
def env_check():
    res = jsonify({
        "hasGoogleKey": bool(config.GOOGLE_API_KEY),
        "googleKey": mask_key(config.GOOGLE_API_KEY),
        "googleModel": config.GOOGLE_MODEL,
        "python": platform.python_version(),
    })
    res.headers["Cache-Control"] = "no-store"
    return res
