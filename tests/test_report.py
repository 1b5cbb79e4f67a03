import json
from pathlib import Path

import pytest

from ipheatmap.config import HeatmapConfig
from ipheatmap.errors import ReportValidationError
from ipheatmap.heatmap import Heatmap
from ipheatmap.report import build_report, load_report_schema, validate_report

FIXTURES = Path(__file__).parent / "fixtures"


def _heatmap(mode="raw", text="10.0.0.0/8 4\n11.0.0.1 2\n"):
    hm = Heatmap(HeatmapConfig(bits_per_pixel=24, value_mode=mode))
    hm.process_text(text)
    return hm


def test_report_for_continuous_mode():
    report = build_report(_heatmap())
    assert report["report_version"] == "0.1"
    assert report["config"]["value_mode"] == "raw"
    assert report["buffer"]["painted_pixels"] == 2
    assert report["domain"] == {"curve": "linear", "min_value": 0.0, "max_value": 4.0}
    validate_report(report)


def test_report_for_categorical_mode():
    report = build_report(_heatmap(mode="categorical"))
    assert report["domain"] is None
    assert report["buffer"]["buffer_min"] == -1
    validate_report(report)


def test_report_records_collapsed_domain():
    report = build_report(_heatmap(mode="scaled", text="10.0.0.1 1\n"))
    assert "error" in report["domain"]
    validate_report(report)


def test_invalid_report_rejected():
    report = build_report(_heatmap())
    report["buffer"]["painted_pixels"] = -3
    with pytest.raises(ReportValidationError):
        validate_report(report)


def test_example_report_conforms_to_schema():
    with open(FIXTURES / "heatmap_report_example.json", "r", encoding="utf-8") as handle:
        report = json.load(handle)
    validate_report(report, schema=load_report_schema())
