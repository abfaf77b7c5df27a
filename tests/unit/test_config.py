"""Unit tests for configuration loading and validation."""

import pytest

from jobscout.config import DEFAULT_CONFIG_PATH, JobDiscoveryConfig, load_config
from jobscout.config.loader import resolve_config_path, validate_config
from jobscout.exceptions import ErrorCode, JobDiscoveryError


@pytest.fixture
def yaml_copy(tmp_path):
    """Write a modified copy of the bundled YAML and return its path."""

    def _copy(old=None, new=None, append=""):
        text = DEFAULT_CONFIG_PATH.read_text(encoding="utf-8")
        if old is not None:
            assert old in text
            text = text.replace(old, new, 1)
        path = tmp_path / "job_discovery.yaml"
        path.write_text(text + append, encoding="utf-8")
        return path

    return _copy


class TestLoadConfig:
    @pytest.mark.unit
    def test_bundled_config_loads(self):
        config = load_config()

        assert isinstance(config, JobDiscoveryConfig)
        assert config.ranking.weights.fit_score == 0.5
        assert config.parsing.min_length == 50
        assert config.categorization.thresholds.safety.alignment == ["aligned", "overqualified"]
        assert config.career_capital.salary_benchmarks["5"] == 150000

    @pytest.mark.unit
    def test_each_load_is_a_fresh_object(self):
        assert load_config() is not load_config()

    @pytest.mark.unit
    def test_env_var_selects_file(self, yaml_copy, monkeypatch):
        path = yaml_copy("min_length: 50", "min_length: 80")
        monkeypatch.setenv("JOB_DISCOVERY_CONFIG_PATH", str(path))

        assert resolve_config_path() == path
        assert load_config().parsing.min_length == 80

    @pytest.mark.unit
    def test_explicit_path_beats_env_var(self, yaml_copy, monkeypatch, tmp_path):
        monkeypatch.setenv("JOB_DISCOVERY_CONFIG_PATH", str(tmp_path / "elsewhere.yaml"))
        assert resolve_config_path(DEFAULT_CONFIG_PATH) == DEFAULT_CONFIG_PATH

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(JobDiscoveryError) as exc_info:
            load_config(tmp_path / "absent.yaml")

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR
        assert exc_info.value.details["path"].endswith("absent.yaml")

    @pytest.mark.unit
    def test_unknown_key_rejected(self, yaml_copy):
        with pytest.raises(JobDiscoveryError) as exc_info:
            load_config(yaml_copy(append="\nunknown_section:\n  value: 1\n"))
        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    @pytest.mark.unit
    def test_mistyped_value_rejected(self, yaml_copy):
        with pytest.raises(JobDiscoveryError) as exc_info:
            load_config(yaml_copy("min_length: 50", "min_length: fifty"))
        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    @pytest.mark.unit
    def test_range_problems_reported(self, yaml_copy):
        with pytest.raises(JobDiscoveryError) as exc_info:
            load_config(yaml_copy("fit_score: 0.5", "fit_score: 1.5"))

        assert exc_info.value.details["problems"] == [
            "ranking.weights.fit_score must be within [0, 1], got 1.5"
        ]


class TestValidateConfig:
    @pytest.mark.unit
    def test_bundled_config_is_valid(self):
        assert validate_config(load_config()) == []

    @pytest.mark.unit
    def test_band_bounds(self):
        config = load_config()
        config.categorization.thresholds.target.min_fit = 90
        assert validate_config(config) == [
            "categorization.thresholds.target.min_fit exceeds max_fit"
        ]

    @pytest.mark.unit
    def test_lengths_and_priority_thresholds(self):
        config = load_config()
        config.parsing.min_length = 0
        config.priority_thresholds.medium = 80

        problems = validate_config(config)
        assert "parsing.min_length must be positive and below parsing.max_length" in problems
        assert "priority_thresholds.medium exceeds priority_thresholds.high" in problems

    @pytest.mark.unit
    def test_seniority_years_must_not_decrease(self):
        config = load_config()
        config.seniority_mappings.senior.min_years = 1
        assert "seniority_mappings.senior.min_years must not decrease with seniority" in (
            validate_config(config)
        )

    @pytest.mark.unit
    def test_location_multipliers_need_default(self):
        config = load_config()
        del config.career_capital.location_multipliers["default"]
        assert "career_capital.location_multipliers must define 'default'" in (
            validate_config(config)
        )

    @pytest.mark.unit
    def test_step_tables_and_patterns_checked(self):
        config = load_config()
        config.career_capital.scoring.comp_ratio_scores["high"] = 90
        config.scam_detection.red_flags.urgency_patterns.append("apply(")

        problems = validate_config(config)
        assert "career_capital.scoring.comp_ratio_scores key 'high' is not a number" in problems
        assert any(
            problem.startswith("scam_detection.red_flags.urgency_patterns 'apply('")
            for problem in problems
        )


class TestLookupHelpers:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "years, expected", [(0, 80000), (1.5, 80000), (2, 110000), (7, 150000), (20, 230000)]
    )
    def test_salary_benchmark(self, config, years, expected):
        assert config.career_capital.salary_benchmark(years) == expected

    @pytest.mark.unit
    def test_location_multiplier(self, config):
        capital = config.career_capital
        assert capital.location_multiplier("San Francisco, CA") == 1.3
        assert capital.location_multiplier("Denver, CO") == 1.0

    @pytest.mark.unit
    def test_seniority_keyword_order(self, config):
        mappings = config.seniority_mappings
        assert mappings.keyword_level("Senior Staff Engineer") == "lead"
        assert mappings.keyword_level("Mid-level Senior Developer") == "senior"
        assert mappings.keyword_level("Engineer") is None

    @pytest.mark.unit
    def test_step_lookup(self, config):
        scoring = config.career_capital.scoring
        assert scoring.new_skill_bonus(0) == 0
        assert scoring.new_skill_bonus(4) == 30
        assert scoring.comp_ratio_score(1.0) == 60
        assert scoring.comp_ratio_score(0.5) == 25
