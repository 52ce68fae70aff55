"""
API routes (JSON endpoints).

Handles:
- /api/estimate - Compute a layout and cost estimate
- /api/catalog  - Substrate, laminate and roll-width presets plus defaults
- /health       - Health check endpoint
"""

from flask import (
    Blueprint,
    current_app,
    request,
)

from modules.catalog import catalog_to_dict
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/api/estimate", methods=["POST"])
def estimate():
    """
    Compute an estimate from a JSON body.

    The form is recomputed on every change, so an incomplete form is an
    ordinary request: it answers 200 with "result": null and a "no_result"
    object naming the reason and field. Only a body that is not a JSON
    object is rejected with 400.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {"error": "Request body must be a JSON object"}, 400

    estimate_service = current_app.config.get("ESTIMATE_SERVICE")
    if not estimate_service:
        return {"error": "Estimate service unavailable"}, 503

    try:
        response = estimate_service.estimate(payload)
        return response.to_dict()
    except Exception as e:
        logger.error(f"Estimate failed: {e}", exc_info=True)
        return {"error": f"Estimate error: {str(e)}"}, 500


@api_bp.route("/api/catalog", methods=["GET"])
def catalog():
    """Catalog presets and the configured defaults for the estimate form."""
    estimate_service = current_app.config.get("ESTIMATE_SERVICE")
    data = catalog_to_dict()
    data["defaults"] = estimate_service.defaults() if estimate_service else {}
    return data


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    if current_app.config.get("ESTIMATE_SERVICE"):
        health_status["checks"]["estimate_service"] = "ok"
    else:
        health_status["checks"]["estimate_service"] = "not_available"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
