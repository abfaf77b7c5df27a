"""Unit tests for career capital scoring."""

import pytest

from jobscout.config import load_config
from jobscout.contexts.assessment.career_capital import (
    calculate_career_capital,
    score_brand,
    score_compensation,
    score_network,
    score_skill_growth,
)


@pytest.fixture
def capital(config):
    return config.career_capital


class TestBrand:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "company, tier, expected",
        [
            ("Google", "startup", 95),
            ("Figma", "startup", 80),
            ("Acme", "startup", 40),
            ("Acme", "established", 60),
            ("Acme", "unicorn", 80),
        ],
    )
    def test_tier_lists_then_intake_tier(self, capital, make_job, company, tier, expected):
        assert score_brand(make_job(company=company, company_tier=tier), capital) == expected


class TestSkillGrowth:
    @pytest.mark.unit
    def test_new_and_cutting_edge_bonuses(self, capital, make_job):
        job = make_job(required_skills=["Python", "Rust", "GraphQL"], required_tools=["Kubernetes"])
        # 3 new skills (+30) and 3 cutting-edge items (+30)
        assert score_skill_growth(job, capital, ["python"]) == 90

    @pytest.mark.unit
    def test_nothing_new(self, capital, make_job):
        job = make_job(required_skills=["Python", "SQL"])
        assert score_skill_growth(job, capital, ["Python", "SQL"]) == 30

    @pytest.mark.unit
    def test_capped_at_100(self, capital, make_job):
        job = make_job(
            required_skills=["Rust", "GraphQL", "PyTorch", "TensorFlow", "MLOps"],
            required_tools=["Kubernetes", "Terraform"],
        )
        assert score_skill_growth(job, capital, []) == 100


class TestNetwork:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "location, size, arrangement, expected",
        [
            ("San Francisco, CA", "1000+", "onsite", 85),
            ("Austin, TX", "100-500", "hybrid", 75),
            ("Remote", None, "remote", 45),
            ("Denver, CO", "small", "onsite", 50),
        ],
    )
    def test_hub_size_and_remote(self, capital, make_job, location, size, arrangement, expected):
        job = make_job(location=location, company_size=size, work_arrangement=arrangement)
        assert score_network(job, capital) == expected


class TestCompensation:
    @pytest.mark.unit
    def test_no_salary_is_neutral(self, capital, make_job):
        assert score_compensation(make_job(), capital, 5) == 50

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "location, salary_max, years, expected",
        [
            # benchmark 150000 x 1.3
            ("San Francisco, CA", 260000, 5, 95),
            # benchmark 150000 x 1.05
            ("Austin, TX", 160000, 5, 60),
            # benchmark 80000
            ("Remote", 90000, 0, 80),
            # benchmark 190000
            ("Denver, CO", 100000, 8, 25),
        ],
    )
    def test_ratio_bands(self, capital, make_job, location, salary_max, years, expected):
        job = make_job(location=location, salary=(salary_max - 20000, salary_max))
        assert score_compensation(job, capital, years) == expected


class TestCareerCapital:
    @pytest.mark.unit
    def test_weighted_total_and_interpretations(self, capital, make_job):
        job = make_job(
            company="Google",
            location="Mountain View, CA",
            company_tier="top_tier",
            required_skills=["Python"],
            salary=(160000, 220000),
        )
        result = calculate_career_capital(
            job, capital, years_experience=5, current_skills=["Python"]
        )

        assert (result.brand_score, result.skill_growth_score) == (95, 30)
        assert (result.network_score, result.comp_score) == (70, 80)
        assert result.score == round(95 * 0.3 + 30 * 0.3 + 70 * 0.2 + 80 * 0.2)
        assert result.breakdown == {
            "brand": "Top-tier company - excellent for career branding",
            "skill_growth": "Limited growth - mostly existing skills",
            "network": "Good networking - solid opportunities",
            "comp": "Good comp - competitive offer",
        }

    @pytest.mark.unit
    def test_score_in_range(self, capital, make_job):
        job = make_job(company="Unknown Company", company_tier="unknown")
        result = calculate_career_capital(job, capital)
        assert 0 <= result.score <= 100
        assert result.breakdown["brand"] == "Startup/lesser-known - build your own brand"


class TestConfiguredPoints:
    @pytest.fixture
    def own_capital(self):
        return load_config().career_capital

    @pytest.mark.unit
    def test_network_points_come_from_config(self, own_capital, make_job):
        own_capital.scoring.network_base = 40
        own_capital.scoring.remote_penalty = 30
        job = make_job(location="Remote", company_size=None, work_arrangement="remote")
        # 40 base + 5 unknown size - 30 remote
        assert score_network(job, own_capital) == 15

    @pytest.mark.unit
    def test_skill_bonus_table_from_config(self, own_capital, make_job):
        own_capital.scoring.skill_growth_base = 10
        own_capital.scoring.new_skill_bonuses = {"1": 5, "2": 50}
        job = make_job(required_skills=["Python", "SQL"])
        assert score_skill_growth(job, own_capital, []) == 60

    @pytest.mark.unit
    def test_comp_ratio_table_from_config(self, own_capital, make_job):
        own_capital.scoring.comp_ratio_scores = {"2.0": 99}
        own_capital.scoring.below_market_comp_score = 7
        job = make_job(location="Denver, CO", salary=(140000, 160000))
        assert score_compensation(job, own_capital, 5) == 7
        job = make_job(location="Denver, CO", salary=(280000, 300000))
        assert score_compensation(job, own_capital, 5) == 99
