from flask import Blueprint, current_app, jsonify, request

from divelog.dive.models import Dive, parse_date
from divelog.errors import InvalidDiveError

bp = Blueprint("dives", __name__)


def _request_json():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidDiveError("Request body must be JSON")
    return data


@bp.route("", methods=["GET"])
def list_dives():
    """List dives, filtered by ?date= and/or ?location= when given."""
    date_arg = request.args.get("date")
    dives = current_app.dive_service.list_dives(
        dive_date=parse_date(date_arg) if date_arg is not None else None,
        location=request.args.get("location"),
    )
    return jsonify([d.to_json() for d in dives])


@bp.route("", methods=["POST"])
def create_dive():
    """Log a new dive."""
    dive = Dive.from_json(_request_json())
    created = current_app.dive_service.create_dive(dive)
    return jsonify(created.to_json()), 201


@bp.route("", methods=["PUT"])
def update_dives():
    """Update a batch of dives, each matched by its own id."""
    data = _request_json()
    if not isinstance(data, list):
        raise InvalidDiveError("Request body must be a JSON list of dives")

    result = current_app.dive_service.update_dives([Dive.from_json(d) for d in data])
    return jsonify(result.to_json())


@bp.route("", methods=["DELETE"])
def delete_all_dives():
    """Delete every dive."""
    deleted = current_app.dive_service.delete_all_dives()
    return jsonify([d.to_json() for d in deleted])


@bp.route("/<int:dive_id>", methods=["GET"])
def get_dive(dive_id: int):
    """Get dive by ID."""
    dive = current_app.dive_service.get_dive(dive_id)
    return jsonify(dive.to_json())


@bp.route("/<int:dive_id>", methods=["PUT"])
def update_dive(dive_id: int):
    """Replace a dive's fields."""
    dive = Dive.from_json(_request_json())
    updated = current_app.dive_service.update_dive(dive_id, dive)
    return jsonify(updated.to_json())


@bp.route("/<int:dive_id>", methods=["DELETE"])
def delete_dive(dive_id: int):
    """Delete dive by ID."""
    deleted = current_app.dive_service.delete_dive(dive_id)
    return jsonify(deleted.to_json())
