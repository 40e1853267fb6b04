from __future__ import annotations

import math

import pytest

from fader.config.models import FaderConfig
from fader.config.normalize import normalize_config


@pytest.mark.parametrize(
    "raw",
    [
        None,
        42,
        3.5,
        True,
        "images.json",
        b"bytes",
        {},
        [],
        ["a", "b"],
        {"images": "x.png"},
        {"images": None, "INTERVAL_MS": "abc"},
        {"images": [1, None, "a.png"], "FADE_MS": float("nan")},
        {"INTERVAL_MS": float("inf"), "FADE_MS": -10},
        {"INTERVAL_MS": 10**400},
        {"INTERVAL_MS": [1000], "fadeMs": {"value": 1}},
        object(),
    ],
)
def test_normalize_config_should_be_total(raw) -> None:
    config = normalize_config(raw, 5000, 3000)
    assert isinstance(config, FaderConfig)
    assert all(isinstance(image, str) and image for image in config.images)
    assert math.isfinite(config.timing.interval_ms) and config.timing.interval_ms > 0
    assert math.isfinite(config.timing.fade_ms) and config.timing.fade_ms > 0


def test_normalize_config_should_accept_legacy_list() -> None:
    config = normalize_config(["x.png", "y.png"], 5000, 3000)
    assert config.images == ("x.png", "y.png")
    assert config.timing.interval_ms == 5000
    assert config.timing.fade_ms == 3000


def test_normalize_config_should_keep_duplicates_and_order() -> None:
    config = normalize_config({"images": ["b.png", "a.png", "b.png"]}, 5000, 3000)
    assert config.images == ("b.png", "a.png", "b.png")


def test_normalize_config_should_read_keyed_timing() -> None:
    config = normalize_config({"images": ["a.png"], "INTERVAL_MS": 7000, "FADE_MS": "1500"}, 5000, 3000)
    assert config.images == ("a.png",)
    assert config.timing.interval_ms == 7000
    assert config.timing.fade_ms == 1500


def test_normalize_config_should_accept_camel_case_keys() -> None:
    config = normalize_config({"images": [], "intervalMs": "750", "fadeMs": 250.5}, 5000, 3000)
    assert config.timing.interval_ms == 750
    assert config.timing.fade_ms == 250.5


def test_normalize_config_should_prefer_upper_case_key() -> None:
    config = normalize_config({"INTERVAL_MS": 1000, "intervalMs": 2000}, 5000, 3000)
    assert config.timing.interval_ms == 1000


def test_normalize_config_should_fall_back_to_camel_case_when_upper_is_null() -> None:
    config = normalize_config({"INTERVAL_MS": None, "intervalMs": 2000}, 5000, 3000)
    assert config.timing.interval_ms == 2000


def test_normalize_config_should_use_default_when_upper_case_value_is_invalid() -> None:
    config = normalize_config({"INTERVAL_MS": -5, "intervalMs": 2000, "FADE_MS": 0}, 5000, 3000)
    assert config.timing.interval_ms == 5000
    assert config.timing.fade_ms == 3000


def test_normalize_config_should_reject_boolean_timing() -> None:
    config = normalize_config({"INTERVAL_MS": True}, 5000, 3000)
    assert config.timing.interval_ms == 5000


def test_normalize_config_should_yield_empty_pool_for_unknown_shape() -> None:
    config = normalize_config("not a config", 4000, 2000)
    assert config.images == ()
    assert config.is_idle
    assert config.timing.interval_ms == 4000
    assert config.timing.fade_ms == 2000


def test_normalize_config_should_replace_invalid_defaults() -> None:
    config = normalize_config(None, -1, float("nan"))
    assert config.timing.interval_ms == 5000
    assert config.timing.fade_ms == 3000


def test_normalize_config_should_reject_digit_separators_in_strings() -> None:
    config = normalize_config({"INTERVAL_MS": "1_000", "fadeMs": "2_500"}, 5000, 3000)
    assert config.timing.interval_ms == 5000
    assert config.timing.fade_ms == 3000


def test_normalize_config_should_drop_non_string_legacy_entries(caplog) -> None:
    config = normalize_config(["a.png", 7, "", None, "b.png"], 5000, 3000)
    assert config.images == ("a.png", "b.png")
    assert "Dropped invalid image entries" in caplog.text
