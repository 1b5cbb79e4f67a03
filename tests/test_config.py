import argparse

import pytest

from ipheatmap.config import HeatmapConfig
from ipheatmap.errors import ConfigurationError
from ipheatmap.modes import ValueMode
from ipheatmap.scale import DomainType


def _args(**overrides):
    values = dict(
        bits_per_pixel=24,
        curve=DomainType.LINEAR,
        min_value=None,
        max_value=None,
        log_min=None,
        log_max=None,
        accumulate=False,
        value_mode=ValueMode.SCALED,
        colour_scale="magma",
        separator=None,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def test_defaults():
    config = HeatmapConfig()
    assert config.bits_per_pixel == 8
    assert config.image_size == 4096
    assert config.domain is DomainType.LINEAR
    assert config.value_mode is ValueMode.SCALED
    assert config.accumulate is False


@pytest.mark.parametrize("bpp", [6, 9, 23, 26])
def test_granularity_bounds(bpp):
    with pytest.raises(ConfigurationError):
        HeatmapConfig(bits_per_pixel=bpp)


def test_names_are_resolved():
    config = HeatmapConfig(
        bits_per_pixel=24, domain="log", value_mode="RAW", colour_scale="accessible"
    )
    assert config.domain is DomainType.LOGARITHMIC
    assert config.value_mode is ValueMode.RAW
    assert config.colour_scale == "cividis"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"value_mode": "density"},
        {"domain": "cubic"},
        {"colour_scale": "sepia"},
        {"separator": "::"},
        {"min_value": 5.0, "max_value": 5.0},
        {"min_value": 9.0, "max_value": 1.0},
    ],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        HeatmapConfig(bits_per_pixel=24, **kwargs)


def test_one_sided_bounds_allowed():
    assert HeatmapConfig(bits_per_pixel=24, min_value=5.0).max_value is None
    assert HeatmapConfig(bits_per_pixel=24, max_value=-5.0).min_value is None


def test_from_args():
    config = HeatmapConfig.from_args(_args(accumulate=True, value_mode=ValueMode.RAW))
    assert config.bits_per_pixel == 24
    assert config.accumulate is True
    assert config.value_mode is ValueMode.RAW


def test_from_args_deprecated_log_bounds():
    config = HeatmapConfig.from_args(_args(log_min=1.0, log_max=100.0))
    assert config.domain is DomainType.LOGARITHMIC
    assert (config.min_value, config.max_value) == (1.0, 100.0)


def test_from_args_new_bounds_win_over_deprecated():
    config = HeatmapConfig.from_args(_args(min_value=2.0, log_min=1.0, log_max=100.0))
    assert config.domain is DomainType.LOGARITHMIC
    assert (config.min_value, config.max_value) == (2.0, 100.0)


def test_to_dict():
    data = HeatmapConfig(bits_per_pixel=24, domain="log").to_dict()
    assert data["curve"] == "logarithmic"
    assert data["value_mode"] == "scaled"
    assert data["bits_per_pixel"] == 24
