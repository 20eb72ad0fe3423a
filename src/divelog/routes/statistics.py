from flask import Blueprint, current_app, jsonify

bp = Blueprint("statistics", __name__)


@bp.route("", methods=["GET"])
def get_dive_statistic():
    """Get statistics over all logged dives."""
    statistic = current_app.statistics_service.get_dive_statistic()
    return jsonify(statistic.to_json())
