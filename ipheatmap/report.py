"""
Render summary reports.

A report records how a heatmap was configured and what ended up in its
buffer; it is validated against the bundled JSON schema before it is
written out.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict, Optional

from jsonschema import ValidationError
from jsonschema import validate as _jsonschema_validate

from .errors import DomainError, ReportValidationError
from .heatmap import Heatmap

REPORT_VERSION = "0.1"
SCHEMA_FILE = "heatmap-report-0.1.schema.json"


def build_report(heatmap: Heatmap) -> Dict[str, Any]:
    """
    Summarises a painted heatmap.

    The domain entry is None in categorical mode, and also when the bounds
    collapse; rendering such a heatmap fails, the report does not.
    """
    domain = None
    if heatmap.policy.continuous:
        try:
            scale = heatmap.calculate_domain()
        except DomainError as exc:
            domain = {"error": str(exc)}
        else:
            domain = {
                "curve": str(scale.domain_type),
                "min_value": scale.min_value,
                "max_value": scale.max_value,
            }

    return {
        "report_version": REPORT_VERSION,
        "config": heatmap.config.to_dict(),
        "buffer": heatmap.stats(),
        "domain": domain,
    }


def load_report_schema() -> Dict[str, Any]:
    schema_path = resources.files("ipheatmap").joinpath(f"schemas/{SCHEMA_FILE}")
    with schema_path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_report(report: Dict[str, Any], schema: Optional[Dict[str, Any]] = None) -> None:
    schema_obj = schema or load_report_schema()
    try:
        _jsonschema_validate(instance=report, schema=schema_obj)
    except ValidationError as exc:
        raise ReportValidationError(f"Report does not match schema: {exc.message}") from exc
