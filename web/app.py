"""Flask JSON API for the car maintenance journal."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional, Union

from flask import Blueprint, Flask, abort, current_app, jsonify, request

from carjournal import (
    MAX_MONTHS,
    MIN_MONTHS,
    SERVICE_INTERVALS,
    CarProfile,
    EventType,
    MaintenanceRecord,
    RecordItem,
    ServiceIntervalEntry,
    delete_record,
    interval_for_make,
    load_journal,
    parse_iso_date,
    save_car_profile,
    save_record,
    spending_summary,
    update_record,
)

logger = logging.getLogger(__name__)

# Path to journals directory (relative to project root)
DEFAULT_JOURNALS_DIR = Path(__file__).parent.parent / "journals"

api = Blueprint("api", __name__, url_prefix="/api")

# Car fields a client may change, JSON key -> CarProfile attribute
CAR_FIELDS = {
    "make": "make",
    "model": "model",
    "year": "year",
    "vin": "vin",
    "photoUri": "photo_uri",
    "currency": "currency",
    "customIntervalKm": "custom_interval_km",
    "customIntervalMonths": "custom_interval_months",
}


def get_journal_files():
    """Get all journal YAML files."""
    return sorted(Path(current_app.config["JOURNALS_DIR"]).glob("*.yaml"))


def get_journal_path(journal_id: str) -> Path:
    """Get full path for a journal ID, 404 if there is no such file."""
    path = Path(current_app.config["JOURNALS_DIR"]) / f"{journal_id}.yaml"
    if "/" in journal_id or not path.exists():
        abort(404, description=f"Journal '{journal_id}' not found")
    return path


def parse_today() -> Optional[date]:
    """Optional ?today=YYYY-MM-DD override, mainly for reproducible reports."""
    value = request.args.get("today")
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as e:
        abort(400, description=str(e))


def interval_to_dict(entry: ServiceIntervalEntry) -> dict:
    return {
        "make": entry.make,
        "models": list(entry.models),
        "intervalKm": entry.interval_km,
        "intervalMonths": entry.interval_months,
    }


def car_to_dict(car: CarProfile) -> dict:
    return {
        "id": car.id,
        "make": car.make,
        "model": car.model,
        "year": car.year,
        "vin": car.vin,
        "photoUri": car.photo_uri,
        "currency": car.currency,
        "customIntervalKm": car.custom_interval_km,
        "customIntervalMonths": car.custom_interval_months,
    }


def record_to_dict(record: MaintenanceRecord) -> dict:
    return {
        "id": record.id,
        "date": record.date,
        "mileageKm": record.mileage_km,
        "eventType": record.event_type.value,
        "title": record.title,
        "items": [
            {"itemId": item.item_id, "name": item.name, "cost": item.cost}
            for item in record.items
        ],
        "totalCost": record.total_cost,
        "currency": record.currency,
        "carId": record.car_id,
    }


def record_from_json(
    data: dict,
    currency: str,
    car_id: Optional[str],
    record_id: Optional[str] = None,
) -> MaintenanceRecord:
    """Build a record from a request body. Raises ValueError on bad input."""
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")

    event_type = EventType(data.get("eventType", EventType.PLANNED.value))
    record_date = data.get("date") or ""
    if record_date:
        parse_iso_date(record_date)
    elif event_type != EventType.FUTURE:
        raise ValueError("date is required")

    mileage = int(data.get("mileageKm") or 0)
    if mileage < 0:
        raise ValueError("mileageKm must be >= 0")

    items = []
    for raw in data.get("items") or []:
        cost = float(raw.get("cost", 0))
        if cost < 0:
            raise ValueError("item cost must be >= 0")
        items.append(RecordItem(str(raw.get("name", "")), cost, raw.get("itemId")))

    if items:
        total = sum(item.cost for item in items)
    else:
        total = float(data.get("totalCost") or 0)
        if total < 0:
            raise ValueError("totalCost must be >= 0")
    return MaintenanceRecord(
        date=record_date,
        mileage_km=0 if event_type == EventType.FUTURE else mileage,
        event_type=event_type,
        title=str(data.get("title", "")),
        items=items,
        total_cost=total,
        currency=data.get("currency") or currency,
        id=record_id,
        car_id=car_id,
    )


def car_from_json(data: dict, current: CarProfile) -> CarProfile:
    """
    Apply a partial update to a car profile. Raises ValueError on bad input.

    Keys left out of the body keep their current value; the car id never changes.
    """
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")

    values = {attr: getattr(current, attr) for attr in CAR_FIELDS.values()}
    for key, attr in CAR_FIELDS.items():
        if key in data:
            values[attr] = data[key]

    make = values["make"]
    if not isinstance(make, str) or not make.strip():
        raise ValueError("make is required")

    for key in ("customIntervalKm", "customIntervalMonths"):
        value = values[CAR_FIELDS[key]]
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{key} must be a positive integer or null")

    return CarProfile(
        make.strip(),
        values["model"],
        values["year"],
        values["vin"],
        values["photo_uri"],
        values["currency"],
        values["custom_interval_km"],
        values["custom_interval_months"],
        current.id,
    )


def error_response(error) -> tuple:
    return jsonify({"error": error.description}), error.code


@api.route("/journals")
def index():
    """All journals with their headline figures."""
    journals = []
    for path in get_journal_files():
        journal = load_journal(path)
        info = journal.next_service()
        journals.append(
            {
                "id": path.stem,
                "car": journal.car.name,
                "records": len(journal.car_records),
                "currentMileageKm": journal.current_mileage,
                "overdue": info.overdue if info else False,
            }
        )
    return jsonify(journals)


@api.route("/journals/<journal_id>")
def journal_detail(journal_id: str):
    journal = load_journal(get_journal_path(journal_id))
    interval = journal.interval
    last = journal.last_record
    return jsonify(
        {
            "id": journal_id,
            "car": car_to_dict(journal.car),
            "interval": {
                "intervalKm": interval.interval_km,
                "intervalMonths": interval.interval_months,
                "isCustom": interval.is_custom,
            },
            "currentMileageKm": journal.current_mileage,
            "lastRecord": record_to_dict(last) if last else None,
        }
    )


@api.route("/journals/<journal_id>/car", methods=["PUT"])
def edit_car(journal_id: str):
    """Update the car profile; records are left untouched."""
    path = get_journal_path(journal_id)
    journal = load_journal(path)
    try:
        car = car_from_json(request.get_json(silent=True), journal.car)
    except ValueError as e:
        abort(400, description=str(e))

    save_car_profile(path, car)
    logger.info("Updated car profile of %s", journal_id)
    return jsonify(car_to_dict(car))


@api.route("/journals/<journal_id>/records", methods=["GET"])
def journal_records(journal_id: str):
    """Records, filtered by ?type=, ?q= and ?since=."""
    journal = load_journal(get_journal_path(journal_id))
    try:
        records = journal.filter_records(
            event_type=request.args.get("type") or None,
            search=request.args.get("q"),
            since=request.args.get("since") or None,
        )
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify([record_to_dict(r) for r in records])


@api.route("/journals/<journal_id>/records", methods=["POST"])
def add_journal_record(journal_id: str):
    path = get_journal_path(journal_id)
    journal = load_journal(path)
    try:
        record = record_from_json(
            request.get_json(silent=True), journal.car.currency, journal.car.id
        )
    except (AttributeError, TypeError, ValueError) as e:
        abort(400, description=str(e))

    save_record(path, record)
    logger.info("Added %s record %s to %s", record.event_type.value, record.id, journal_id)
    return jsonify(record_to_dict(record)), 201


@api.route("/journals/<journal_id>/records/<record_id>", methods=["GET"])
def journal_record(journal_id: str, record_id: str):
    journal = load_journal(get_journal_path(journal_id))
    record = journal.get_record(record_id)
    if record is None:
        abort(404, description=f"Record '{record_id}' not found")
    return jsonify(record_to_dict(record))


@api.route("/journals/<journal_id>/records/<record_id>", methods=["PUT"])
def edit_journal_record(journal_id: str, record_id: str):
    """Partial update: keys left out of the body keep their stored value."""
    path = get_journal_path(journal_id)
    journal = load_journal(path)
    existing = journal.get_record(record_id)
    if existing is None:
        abort(404, description=f"Record '{record_id}' not found")

    body = request.get_json(silent=True)
    try:
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        merged = record_to_dict(existing)
        merged.update(body)
        record = record_from_json(
            merged, existing.currency, existing.car_id, record_id=existing.id
        )
    except (AttributeError, TypeError, ValueError) as e:
        abort(400, description=str(e))

    update_record(path, record_id, record)
    logger.info("Updated record %s in %s", record_id, journal_id)
    return jsonify(record_to_dict(record))


@api.route("/journals/<journal_id>/records/<record_id>", methods=["DELETE"])
def remove_journal_record(journal_id: str, record_id: str):
    path = get_journal_path(journal_id)
    try:
        delete_record(path, record_id)
    except KeyError:
        abort(404, description=f"Record '{record_id}' not found")
    return jsonify({"message": "Record deleted"})


@api.route("/journals/<journal_id>/next-service")
def journal_next_service(journal_id: str):
    journal = load_journal(get_journal_path(journal_id))
    info = journal.next_service(parse_today())
    return jsonify(info.to_dict() if info else None)


@api.route("/journals/<journal_id>/stats")
def journal_stats(journal_id: str):
    """Spending summary; ?months= sets the monthly window (default 6)."""
    journal = load_journal(get_journal_path(journal_id))
    months = request.args.get("months", 6, type=int)
    if months is None or not MIN_MONTHS <= months <= MAX_MONTHS:
        abort(400, description=f"months must be between {MIN_MONTHS} and {MAX_MONTHS}")
    return jsonify(spending_summary(journal.car_records, months, parse_today()))


@api.route("/service-intervals")
def service_intervals():
    return jsonify([interval_to_dict(entry) for entry in SERVICE_INTERVALS])


@api.route("/service-intervals/<make>")
def service_interval_for_make(make: str):
    entry = interval_for_make(make)
    if entry is None:
        abort(404, description=f"No service interval for '{make}'")
    return jsonify(interval_to_dict(entry))


def create_app(journals_dir: Optional[Union[str, Path]] = None) -> Flask:
    """Build the app. Journals live in CARJOURNAL_DIR unless journals_dir is given."""
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
    app.config["JOURNALS_DIR"] = Path(
        journals_dir or os.environ.get("CARJOURNAL_DIR", DEFAULT_JOURNALS_DIR)
    )
    app.register_blueprint(api)
    app.register_error_handler(400, error_response)
    app.register_error_handler(404, error_response)

    logger.debug("Serving journals from %s", app.config["JOURNALS_DIR"])
    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
