# tests/test_config.py
import pytest

from netlist_core.constants import DEFAULT_COINCIDENCE_TOLERANCE, MAX_CONFIGURATIONS
from netlist_core.extraction import ConfigParsingError, ExtractionConfig, parse_extraction_config


class TestExtractionConfig:

    def test_defaults(self):
        config = ExtractionConfig()
        assert config.tolerance == DEFAULT_COINCIDENCE_TOLERANCE
        assert config.snap_grid is None
        assert config.max_configurations == MAX_CONFIGURATIONS
        assert config.overflow_policy == "error"

    @pytest.mark.parametrize("kwargs", [
        {"tolerance": -1e-3},
        {"snap_grid": 0.0},
        {"max_configurations": 0},
        {"max_configurations": True},
        {"overflow_policy": "ignore"},
    ])
    def test_invalid_values_are_rejected(self, kwargs):
        with pytest.raises(ConfigParsingError):
            ExtractionConfig(**kwargs)


class TestParseExtractionConfig:

    def test_missing_block_gives_defaults(self):
        assert parse_extraction_config(None) == ExtractionConfig()
        assert parse_extraction_config({}) == ExtractionConfig()

    def test_lengths_are_converted_to_layout_units(self):
        config = parse_extraction_config({"tolerance": "0.0254 mm", "snap_grid": "0.1 inch"}, layout_unit="mil")
        assert config.tolerance == pytest.approx(1.0)
        assert config.snap_grid == pytest.approx(100.0)

    def test_bare_numbers_are_layout_units(self):
        config = parse_extraction_config({"tolerance": 0.5, "max_configurations": 10, "overflow_policy": "warn"})
        assert (config.tolerance, config.max_configurations, config.overflow_policy) == (0.5, 10, "warn")

    def test_null_snap_grid_is_allowed(self):
        assert parse_extraction_config({"snap_grid": None}).snap_grid is None

    @pytest.mark.parametrize("raw", [
        {"tolerance": "1 second"},
        {"tolerance": "3 furlongz"},
        {"max_configurations": "many"},
        {"overflow_policy": "shrug"},
    ])
    def test_bad_values_raise_config_parsing_error(self, raw):
        with pytest.raises(ConfigParsingError):
            parse_extraction_config(raw)
