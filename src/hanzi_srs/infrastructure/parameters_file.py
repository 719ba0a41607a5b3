"""
YAML parameter files.

A parameter file is a mapping such as:

    request_retention: 0.85
    maximum_interval: 3650
    w: [0.40255, 1.18385, ...]

Missing keys fall back to the defaults.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from hanzi_srs.domain.constants import DEFAULT_MAXIMUM_INTERVAL, DEFAULT_REQUEST_RETENTION
from hanzi_srs.domain.errors import InvalidParametersError
from hanzi_srs.domain.models import DEFAULT_PARAMETERS, Parameters

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"request_retention", "maximum_interval", "w"}


def read_parameters_mapping(path: Path) -> dict[str, Any]:
    """Parse the file and return its top-level mapping."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidParametersError(f"Cannot read parameter file {path}: {e}") from e

    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise InvalidParametersError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidParametersError(
            f"Parameter file {path} must contain a mapping, got {type(data).__name__}"
        )

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        logger.warning(f"Ignoring unknown keys in {path}: {sorted(unknown)}")
    return {k: v for k, v in data.items() if k in _KNOWN_KEYS}


def load_parameters(path: Path) -> Parameters:
    """
    Build a Parameters bundle from a YAML file.

    Raises:
        InvalidParametersError: If the file is unreadable or its values are invalid.
    """
    data = read_parameters_mapping(path)
    maximum_interval = data.get("maximum_interval", DEFAULT_MAXIMUM_INTERVAL)
    if isinstance(maximum_interval, float) and maximum_interval.is_integer():
        maximum_interval = int(maximum_interval)
    if isinstance(maximum_interval, bool) or not isinstance(maximum_interval, int):
        raise InvalidParametersError(
            f"maximum_interval in {path} must be a whole number of days, "
            f"got {maximum_interval!r}"
        )

    try:
        params = Parameters(
            request_retention=float(data.get("request_retention", DEFAULT_REQUEST_RETENTION)),
            maximum_interval=maximum_interval,
            w=tuple(data.get("w", DEFAULT_PARAMETERS.w)),
        )
    except (TypeError, ValueError) as e:
        if isinstance(e, InvalidParametersError):
            raise
        raise InvalidParametersError(f"Invalid value in {path}: {e}") from e

    logger.info(f"Loaded FSRS parameters from {path}")
    return params


def dump_parameters(params: Parameters) -> str:
    """Serialise parameters in the format load_parameters reads."""
    return yaml.safe_dump(
        {
            "request_retention": params.request_retention,
            "maximum_interval": params.maximum_interval,
            "w": list(params.w),
        },
        sort_keys=False,
    )
