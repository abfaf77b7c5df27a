"""Unit tests for scam risk detection."""

import pytest

from jobscout.config import load_config
from jobscout.contexts.assessment.scam_detector import detect_scam, is_scam_job
from jobscout.contexts.intake.job_data_structure import UNKNOWN_COMPANY, RawPosting
from jobscout.contexts.intake.job_parser import parse_posting


class TestDetectScam:
    @pytest.mark.unit
    def test_scam_fixture_is_high_risk(self, posting, config):
        job = parse_posting(RawPosting(text=posting("scam_work_from_home")), config).unwrap()
        result = detect_scam(job, config.scam_detection)

        assert result.risk_level == "high"
        assert is_scam_job(result)
        assert "Requests sensitive personal/financial information" in result.red_flags
        assert "Company name is missing or appears suspicious" in result.red_flags

    @pytest.mark.unit
    def test_payment_and_personal_info_requests(self, config, make_job, benign_text):
        text = (
            benign_text
            + "\nPayment by wire transfer. Send your social security number today"
            + "!" * 12
        )
        job = make_job(required_skills=["Python"], raw_text=text)
        result = detect_scam(job, config.scam_detection)

        assert result.risk_level == "high"
        assert 'Contains suspicious phrase: "wire transfer"' in result.red_flags
        assert 'Contains suspicious phrase: "social security number"' in result.red_flags
        assert "Excessive use of exclamation marks, dollar signs, or emojis" in result.red_flags

    @pytest.mark.unit
    def test_legitimate_posting(self, config, make_job):
        job = make_job(required_skills=["Python"])
        result = detect_scam(job, config.scam_detection)
        assert result.risk_level == "none"
        assert result.red_flags == []
        assert not is_scam_job(result)

    @pytest.mark.unit
    def test_real_fixtures_are_not_scams(self, posting, config):
        for name in ("software_engineer_techstartup", "senior_engineer_stripe", "fullstack_google"):
            job = parse_posting(RawPosting(text=posting(name)), config).unwrap()
            assert not is_scam_job(detect_scam(job, config.scam_detection)), name


class TestRiskLevels:
    @pytest.mark.unit
    def test_threshold_reached_is_medium(self, config, make_job):
        # missing company (2) + short text (1) + no requirements (1)
        job = make_job(
            company=UNKNOWN_COMPANY,
            raw_text="Backend Engineer role on a small team building internal tools.",
        )
        result = detect_scam(job, config.scam_detection)

        assert result.score == 4
        assert result.risk_level == "medium"
        assert is_scam_job(result)

    @pytest.mark.unit
    def test_single_flag_is_low(self, config, make_job):
        job = make_job(
            required_skills=["Python"],
            raw_text="Backend Engineer role on a small team building internal tools.",
        )
        result = detect_scam(job, config.scam_detection)

        assert result.red_flag_count == 1
        assert result.risk_level == "low"
        assert not is_scam_job(result)

    @pytest.mark.unit
    def test_keyword_weight_is_capped(self, config, make_job, benign_text):
        text = benign_text + (
            "\nEasy money, passive income, financial freedom, be your own boss "
            "and unlimited earning potential."
        )
        job = make_job(required_skills=["Python"], raw_text=text)
        result = detect_scam(job, config.scam_detection)

        assert result.red_flag_count == 5
        assert result.score == 3
        assert result.risk_level == "low"


class TestIndividualChecks:
    @pytest.mark.unit
    def test_unrealistic_salary(self, config, make_job):
        job = make_job(required_skills=["Python"], salary=(400000, 900000))
        result = detect_scam(job, config.scam_detection)
        assert "Salary ($900,000) seems unrealistically high" in result.red_flags

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "title", ["Work From Home Opportunity", "Earn $500 daily", "Position", "Dev"]
    )
    def test_vague_titles(self, config, make_job, title):
        job = make_job(title=title, required_skills=["Python"])
        result = detect_scam(job, config.scam_detection)
        assert "Job title is vague or suspicious" in result.red_flags

    @pytest.mark.unit
    def test_emoji_heavy_text(self, config, make_job, benign_text):
        text = benign_text + "\n" + "\U0001F600" * 6
        job = make_job(required_skills=["Python"], raw_text=text)
        result = detect_scam(job, config.scam_detection)
        assert "Excessive use of exclamation marks, dollar signs, or emojis" in result.red_flags

    @pytest.mark.unit
    def test_one_urgency_phrase_is_not_pressure(self, config, make_job, benign_text):
        one = detect_scam(
            make_job(required_skills=["Python"], raw_text=benign_text + "\nApply now."),
            config.scam_detection,
        )
        two = detect_scam(
            make_job(
                required_skills=["Python"],
                raw_text=benign_text + "\nApply now. Limited spots available.",
            ),
            config.scam_detection,
        )
        assert "Excessive urgency pressure in job posting" not in one.red_flags
        assert "Excessive urgency pressure in job posting" in two.red_flags


class TestConfiguredRules:
    @pytest.fixture
    def scam_config(self):
        return load_config().scam_detection

    @pytest.mark.unit
    def test_punctuation_limits_from_config(self, scam_config, make_job, benign_text):
        job = make_job(required_skills=["Python"], raw_text=benign_text + "\nGreat team!!!")
        flag = "Excessive use of exclamation marks, dollar signs, or emojis"
        assert flag not in detect_scam(job, scam_config).red_flags

        scam_config.red_flags.max_exclamations = 2
        assert flag in detect_scam(job, scam_config).red_flags

    @pytest.mark.unit
    def test_urgency_patterns_and_minimum_from_config(self, scam_config, make_job, benign_text):
        scam_config.red_flags.urgency_patterns = [r"respond\s+within\s+\d+\s+hours"]
        scam_config.red_flags.min_urgency_phrases = 1
        job = make_job(
            required_skills=["Python"], raw_text=benign_text + "\nRespond within 24 hours."
        )
        assert "Excessive urgency pressure in job posting" in (
            detect_scam(job, scam_config).red_flags
        )

    @pytest.mark.unit
    def test_personal_info_patterns_from_config(self, scam_config, make_job, benign_text):
        scam_config.red_flags.personal_info_patterns = [r"passport\s+scan"]
        job = make_job(
            required_skills=["Python"], raw_text=benign_text + "\nSend a passport scan."
        )
        assert "Requests sensitive personal/financial information" in (
            detect_scam(job, scam_config).red_flags
        )
