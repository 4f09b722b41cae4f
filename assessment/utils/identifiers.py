"""
Identifier normalization

Storage uses positive integer ids. Payloads and historical rows may carry the
same id as an int, a numeric string, or an embedded object with an "id".
Everything is normalized here before comparison or lookup.
"""
from typing import Any, Iterable, List, Optional

from assessment.exceptions import ValidationError


def extract_ref(ref: Any) -> Any:
    """Unwrap an embedded relation ({"id": ...} or object with .id) to its raw id"""
    if isinstance(ref, dict):
        return ref.get("id")
    if ref is not None and not isinstance(ref, (str, int, float)) and hasattr(ref, "id"):
        return ref.id
    return ref


def try_normalize_id(value: Any) -> Optional[int]:
    """
    Coerce a raw or embedded id to its canonical int form

    Returns None when the value cannot be coerced.
    """
    value = extract_ref(value)

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value if value > 0 else None

    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            number = int(text)
            return number if number > 0 else None

    return None


def normalize_id(value: Any, field: str = "id") -> int:
    """
    Coerce an id to canonical int form

    Raises:
        ValidationError: if the value is not a positive integer id
    """
    normalized = try_normalize_id(value)
    if normalized is None:
        raise ValidationError(f"Invalid {field}: {value!r}")
    return normalized


def normalize_ids(values: Iterable[Any]) -> List[int]:
    """Normalize a list of references, dropping unusable ones and duplicates (order kept)"""
    seen = set()
    ids = []
    for value in values or []:
        normalized = try_normalize_id(value)
        if normalized is not None and normalized not in seen:
            seen.add(normalized)
            ids.append(normalized)
    return ids


def same_id(left: Any, right: Any) -> bool:
    """Compare two ids by their string form"""
    left, right = extract_ref(left), extract_ref(right)
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()
