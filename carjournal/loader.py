"""YAML loading and saving utilities for journal files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .car import CarProfile
from .record import MaintenanceRecord, RecordItem
from .journal import Journal

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _to_number(value: Any) -> Any:
    """Decimal columns may arrive as strings ("1500.00"); turn them into numbers."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
        number = float(value)
        return int(number) if number.is_integer() else number
    return value


def _to_optional_int(value: Any) -> Optional[int]:
    """Interval overrides may be absent, blank, or stored as strings."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(_to_number(value))


def _parse_object(
    dct: Dict[str, Any],
) -> Union[CarProfile, MaintenanceRecord, RecordItem, Journal, dict]:
    """Parse dictionary into appropriate object type."""
    # Maintenance record
    if "eventType" in dct:
        return MaintenanceRecord(
            date=dct.get("date") or "",
            mileage_km=int(_to_number(dct.get("mileageKm") or 0)),
            event_type=dct["eventType"],
            title=dct.get("title") or "",
            items=dct.get("items"),
            total_cost=_to_number(dct.get("totalCost") or 0),
            currency=dct.get("currency") or "₽",
            id=dct.get("id"),
            car_id=dct.get("carId"),
        )
    # Record line item
    elif "name" in dct and "cost" in dct:
        return RecordItem(
            dct["name"],
            _to_number(dct["cost"]),
            dct.get("itemId"),
        )
    # Car profile (inside 'car' key)
    elif "make" in dct:
        return CarProfile(
            dct["make"],
            dct.get("model"),
            dct.get("year"),
            dct.get("vin"),
            dct.get("photoUri"),
            dct.get("currency"),
            _to_optional_int(dct.get("customIntervalKm")),
            _to_optional_int(dct.get("customIntervalMonths")),
            dct.get("id"),
        )
    # Top-level journal object
    elif isinstance(dct.get("car"), CarProfile):
        return Journal(dct["car"], dct.get("records"))
    else:
        return dct


def load_journal(filename: PathLike) -> Journal:
    """Load a journal from a YAML file."""
    with open(filename, "rb") as fp:
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
    journal = json.loads(json_data, object_hook=_parse_object)
    if not isinstance(journal, Journal):
        raise ValueError(f"{filename}: not a journal file (missing 'car' section)")
    logger.debug("Loaded %s: %d records", filename, len(journal.records))
    return journal


def _read_raw(filename: PathLike) -> Dict[str, Any]:
    with open(filename, "r", encoding="utf-8") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)


def _write_raw(filename: PathLike, data: Dict[str, Any]) -> None:
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a MaintenanceRecord to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
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
    }
    if record.car_id is not None:
        d["carId"] = record.car_id
    return d


def _car_to_dict(car: CarProfile) -> Dict[str, Any]:
    """Serialize a CarProfile to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {}
    if car.id is not None:
        d["id"] = car.id
    d.update(
        {
            "make": car.make,
            "model": car.model,
            "year": car.year,
            "vin": car.vin,
            "photoUri": car.photo_uri,
            "currency": car.currency,
        }
    )
    if car.custom_interval_km is not None:
        d["customIntervalKm"] = car.custom_interval_km
    if car.custom_interval_months is not None:
        d["customIntervalMonths"] = car.custom_interval_months
    return d


def _find_record_index(records: List[Dict[str, Any]], record_id: str) -> int:
    for index, raw in enumerate(records):
        if raw.get("id") == record_id:
            return index
    raise KeyError(f"Record '{record_id}' not found")


def save_record(filename: PathLike, record: MaintenanceRecord) -> None:
    """
    Append a record to a journal YAML file.

    Loads the raw YAML, appends the record to the records list,
    and writes back to the file.
    """
    data = _read_raw(filename)
    if data.get("records") is None:
        data["records"] = []
    data["records"].append(_record_to_dict(record))
    _write_raw(filename, data)
    logger.info("Saved record %s to %s", record.id, filename)


def update_record(
    filename: PathLike, record_id: str, record: MaintenanceRecord
) -> None:
    """Replace the record with the given id in a journal YAML file."""
    data = _read_raw(filename)
    records = data.get("records") or []
    index = _find_record_index(records, record_id)
    records[index] = _record_to_dict(record)
    data["records"] = records
    _write_raw(filename, data)
    logger.info("Updated record %s in %s", record_id, filename)


def delete_record(filename: PathLike, record_id: str) -> None:
    """Remove the record with the given id from a journal YAML file."""
    data = _read_raw(filename)
    records = data.get("records") or []
    del records[_find_record_index(records, record_id)]
    data["records"] = records
    _write_raw(filename, data)
    logger.info("Deleted record %s from %s", record_id, filename)


def save_car_profile(filename: PathLike, car: CarProfile) -> None:
    """Replace the car section of a journal YAML file, leaving records as-is."""
    data = _read_raw(filename)
    data["car"] = _car_to_dict(car)
    _write_raw(filename, data)


def set_custom_interval(
    filename: PathLike, interval_km: Optional[int], interval_months: Optional[int]
) -> None:
    """
    Set or clear the custom service interval in a journal YAML file.

    Passing None for a value removes it. The override only applies once
    both values are set.
    """
    data = _read_raw(filename)
    car = data.get("car") or {}
    for key, value in (
        ("customIntervalKm", interval_km),
        ("customIntervalMonths", interval_months),
    ):
        if value is None:
            car.pop(key, None)
        else:
            car[key] = value
    data["car"] = car
    _write_raw(filename, data)
    logger.info(
        "Custom interval for %s set to %s km / %s months",
        filename,
        interval_km,
        interval_months,
    )


def create_journal(filename: PathLike, car: CarProfile) -> None:
    """Create a new journal YAML file for a car with no records."""
    _write_raw(filename, {"car": _car_to_dict(car), "records": []})
    logger.info("Created journal %s for %s", filename, car.name)


def delete_journal(filename: PathLike) -> None:
    """Remove a journal YAML file from disk."""
    Path(filename).unlink()
    logger.info("Deleted journal %s", filename)
