"""
Hotel Listings Backend — Hotel Document Validator
==================================================

What:  Checks a candidate hotel document against required-field and type rules.
How:   A table maps each field name to a FieldRule (predicate + message).
       validate_hotel() evaluates every rule in declaration order and returns
       one Violation per failed rule, so the client sees all problems at once.
Who:   Called by HotelService before any write.

The module is pure: no I/O, no logging, no mutation of the input.
"""

import math
from numbers import Real
from typing import Any, Callable, Dict, List, NamedTuple


class Violation(NamedTuple):
    """One failed rule: the offending field path and a readable message."""

    param: str
    msg: str


class FieldRule(NamedTuple):
    """Predicate over a field value (MISSING when absent) plus its message."""

    check: Callable[[Any], bool]
    message: str


# Sentinel for absent keys; distinct from an explicit null
MISSING = object()


# ── Predicates ────────────────────────────────────────────────────────────

def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_number(value: Any) -> bool:
    # bool is a subclass of int; true/false are not counts or coordinates.
    # NaN and Infinity parse from JSON but cannot be written back as JSON.
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def is_non_negative_number(value: Any) -> bool:
    return is_number(value) and value >= 0


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def is_optional_string(value: Any) -> bool:
    return value is MISSING or isinstance(value, str)


# ── Rule Tables ───────────────────────────────────────────────────────────

HOTEL_RULES: Dict[str, FieldRule] = {
    "title": FieldRule(is_non_empty_string, "Title is required"),
    "description": FieldRule(is_non_empty_string, "Description is required"),
    "guestCount": FieldRule(is_non_negative_number, "Guest count must be a valid positive number"),
    "bedroomCount": FieldRule(is_non_negative_number, "Bedroom count must be a valid positive number"),
    "bathroomCount": FieldRule(is_non_negative_number, "Bathroom count must be a valid positive number"),
    "amenities": FieldRule(is_array, "Amenities must be an array"),
    "hostInfo": FieldRule(is_non_empty_string, "Host info is required"),
    "address": FieldRule(is_non_empty_string, "Address is required"),
    "latitude": FieldRule(is_number, "Latitude must be a valid decimal number"),
    "longitude": FieldRule(is_number, "Longitude must be a valid decimal number"),
    "rooms": FieldRule(is_array, "Rooms must be an array"),
}

ROOM_RULES: Dict[str, FieldRule] = {
    "hotelSlug": FieldRule(is_non_empty_string, "Room hotel slug is required"),
    "roomSlug": FieldRule(is_non_empty_string, "Room slug is required"),
    "roomImage": FieldRule(is_optional_string, "Room image must be a string"),
    "roomTitle": FieldRule(is_non_empty_string, "Room title is required"),
    "bedroomCount": FieldRule(is_non_negative_number, "Room bedroom count must be a valid positive number"),
}


def _apply_rules(document: Dict[str, Any], rules: Dict[str, FieldRule], prefix: str = "") -> List[Violation]:
    violations = []
    for field, rule in rules.items():
        if not rule.check(document.get(field, MISSING)):
            violations.append(Violation(param=f"{prefix}{field}", msg=rule.message))
    return violations


def _validate_amenities(amenities: List[Any]) -> List[Violation]:
    return [
        Violation(param=f"amenities[{index}]", msg="Amenity must be a string")
        for index, amenity in enumerate(amenities)
        if not isinstance(amenity, str)
    ]


def _validate_rooms(rooms: List[Any]) -> List[Violation]:
    violations = []
    for index, room in enumerate(rooms):
        if not isinstance(room, dict):
            violations.append(Violation(param=f"rooms[{index}]", msg="Room must be an object"))
            continue
        violations.extend(_apply_rules(room, ROOM_RULES, prefix=f"rooms[{index}]."))
    return violations


def _validate_images(images: Any) -> List[Violation]:
    if not is_array(images) or not all(isinstance(path, str) for path in images):
        return [Violation(param="images", msg="Images must be an array of strings")]
    return []


def validate_hotel(document: Any) -> List[Violation]:
    """
    Evaluate every hotel rule against `document`.

    Returns:
        Violations in rule order; an empty list means the document is valid.

    Element rules for `amenities` and `rooms` only run when the field itself
    is an array, so a missing `rooms` yields exactly one violation.
    """
    if not isinstance(document, dict):
        return [Violation(param="body", msg="Hotel data must be a JSON object")]

    violations = _apply_rules(document, HOTEL_RULES)

    if is_array(document.get("amenities")):
        violations.extend(_validate_amenities(document["amenities"]))
    if is_array(document.get("rooms")):
        violations.extend(_validate_rooms(document["rooms"]))
    if "images" in document:
        violations.extend(_validate_images(document["images"]))

    return violations
