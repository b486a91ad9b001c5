"""Approval status map handling.

The status map is the single source of truth for a file's review
progress: department name → ApprovalStatus. Remote records carry it
either as a JSON-encoded string or as a native mapping; ``normalize``
is the one place both shapes are turned into the internal form.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from projectreview.core.departments import REVIEW_DEPARTMENTS
from projectreview.core.errors import ParseError

from .states import ApprovalAction, ApprovalStatus, action_to_status

logger = logging.getLogger(__name__)

StatusMap = Dict[str, ApprovalStatus]

RawStatus = Union[str, bytes, Mapping[str, Any], None]


def parse_status_map(raw: RawStatus) -> StatusMap:
    """Decode a raw approval status value into a status map.

    Args:
        raw: JSON string, mapping, or None

    Returns:
        Status map containing only reviewing departments with known values

    Raises:
        ParseError: If the string is not valid JSON or not a JSON object
    """
    if raw is None:
        return {}

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Malformed approval status JSON: {e.msg}", raw=raw) from e
        if decoded is None:
            return {}
        if not isinstance(decoded, dict):
            raise ParseError(
                f"Approval status must be a JSON object, got {type(decoded).__name__}",
                raw=raw,
            )
        raw = decoded

    if not isinstance(raw, Mapping):
        raise ParseError(f"Unsupported approval status type: {type(raw).__name__}")

    status_map: StatusMap = {}
    for department, value in raw.items():
        if department not in REVIEW_DEPARTMENTS:
            logger.debug(f"Dropping unknown department key {department!r}")
            continue
        try:
            status_map[department] = ApprovalStatus(value)
        except ValueError:
            logger.debug(f"Dropping unknown status {value!r} for {department}")
    return status_map


def normalize(raw: RawStatus) -> StatusMap:
    """Normalize a raw approval status, degrading to an empty map.

    Malformed input never propagates: every department then reads
    back as pending through ``status_for``.
    """
    try:
        return parse_status_map(raw)
    except ParseError as e:
        logger.warning(f"Ignoring unreadable approval status: {e}")
        return {}


def status_for(status_map: Mapping[str, Any], department: Optional[str]) -> ApprovalStatus:
    """Get a department's status, defaulting to pending when absent."""
    value = status_map.get(department) if department else None
    if value is None:
        return ApprovalStatus.PENDING
    try:
        return ApprovalStatus(value)
    except ValueError:
        return ApprovalStatus.PENDING


def apply_action(
    status_map: Mapping[str, ApprovalStatus],
    department: str,
    action: ApprovalAction,
) -> StatusMap:
    """Return a copy of the map with one department's decision recorded.

    All other department entries are carried over unchanged. The prior
    value of ``department`` is not consulted.
    """
    updated: StatusMap = dict(status_map)
    updated[department] = action_to_status(action)
    return updated


def initial_status_map() -> StatusMap:
    """Status map for a freshly submitted file: every reviewer pending."""
    return {department: ApprovalStatus.PENDING for department in REVIEW_DEPARTMENTS}


def dump_status_map(status_map: Mapping[str, ApprovalStatus]) -> Dict[str, str]:
    """Convert a status map to plain JSON-ready strings."""
    return {department: ApprovalStatus(value).value for department, value in status_map.items()}
