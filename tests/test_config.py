"""
Tests for configuration loading and validation.
"""

import pytest

from workingtime.config import WorkingTimeConfig

VALID_YAML = """
working_days:
  1: "09:00-18:00"
  5: "10:00-16:30"
weekends: [0, 6]
holidays: ["01-01", "29-02"]
"""


class TestWorkingTimeConfig:
    """Tests for WorkingTimeConfig."""

    def test_load_from_yaml(self, tmp_path):
        """A valid YAML file loads into typed fields."""
        config_path = tmp_path / "workingtime.yaml"
        config_path.write_text(VALID_YAML, encoding="utf-8")

        config = WorkingTimeConfig.load_from_yaml(config_path)

        assert config.working_days == {1: "09:00-18:00", 5: "10:00-16:30"}
        assert config.weekends == frozenset({0, 6})
        assert config.holidays == frozenset({"01-01", "29-02"})
        assert config.max_iterations == 3660

    def test_windows_are_parsed(self):
        """windows() returns parsed WorkingWindow objects."""
        config = WorkingTimeConfig(working_days={1: "09:00-18:00", 5: "10:00-16:30"})

        windows = config.windows()

        assert windows[1].minutes() == 540
        assert windows[5].minutes() == 390

    def test_missing_file_raises(self, tmp_path):
        """A missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            WorkingTimeConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises(self, tmp_path):
        """Broken YAML raises ValueError."""
        config_path = tmp_path / "workingtime.yaml"
        config_path.write_text("working_days: [1, 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            WorkingTimeConfig.load_from_yaml(config_path)

    def test_non_mapping_root_raises(self, tmp_path):
        """A YAML list at the root is rejected."""
        config_path = tmp_path / "workingtime.yaml"
        config_path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            WorkingTimeConfig.load_from_yaml(config_path)

    @pytest.mark.parametrize("window", ["18:00-09:00", "09:00-09:00", "9:00-18:00", "09:00", "09:00-24:00"])
    def test_invalid_window_rejected(self, window):
        """Windows must be HH:MM-HH:MM with start before end."""
        with pytest.raises(ValueError):
            WorkingTimeConfig(working_days={1: window})

    def test_weekday_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            WorkingTimeConfig(working_days={7: "09:00-18:00"})

    def test_weekend_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            WorkingTimeConfig(working_days={1: "09:00-18:00"}, weekends=[7])

    @pytest.mark.parametrize("holiday", ["30-02", "1-1", "01/01", "32-01"])
    def test_invalid_holiday_rejected(self, holiday):
        """Holidays must be real DD-MM day-month pairs."""
        with pytest.raises(ValueError):
            WorkingTimeConfig(working_days={1: "09:00-18:00"}, holidays=[holiday])

    def test_only_weekend_days_rejected(self):
        """A configuration whose only windows fall on weekends is rejected."""
        with pytest.raises(ValueError, match="no working weekday"):
            WorkingTimeConfig(working_days={0: "09:00-18:00", 6: "09:00-18:00"}, weekends=[0, 6])

    def test_max_iterations_must_be_positive(self):
        with pytest.raises(ValueError):
            WorkingTimeConfig(working_days={1: "09:00-18:00"}, max_iterations=0)

    def test_config_is_immutable(self):
        """Configuration cannot be changed after construction."""
        config = WorkingTimeConfig(working_days={1: "09:00-18:00"})

        with pytest.raises(ValueError):
            config.weekends = frozenset({0})
