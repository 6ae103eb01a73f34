"""Tests for team_optimizer/engine/skill_gaps.py."""

from team_optimizer.engine.skill_gaps import (
    analyze_skill_gap_details,
    analyze_skill_gaps,
    skill_coverage,
)
from team_optimizer.models import Developer, DeveloperProfile
from team_optimizer.settings import OptimizerSettings


def _dev(dev_id: str, strengths: list[str], code_quality: int = 5) -> Developer:
    return Developer(
        id=dev_id,
        name=dev_id.upper(),
        profile=DeveloperProfile(strengths=strengths, code_quality=code_quality),
    )


def _scenario_a() -> list[Developer]:
    return [
        _dev("a", ["Frontend"]),
        _dev("b", ["Frontend", "Backend"]),
        _dev("c", ["Backend"]),
    ]


class TestSkillCoverage:
    def test_counts_per_requirement(self):
        coverage = skill_coverage(_scenario_a(), ["Frontend", "Backend", "DevOps"])
        assert coverage == {"Frontend": 2, "Backend": 2, "DevOps": 0}


class TestSkillGaps:
    def test_scenario_a(self):
        gaps = analyze_skill_gaps(_scenario_a(), ["Frontend", "Backend", "DevOps"])
        assert gaps.critical_gaps == ["DevOps"]
        assert gaps.emerging_needs == []

    def test_emerging_need_single_holder(self):
        devs = [_dev("a", ["Rust", "Go"]), _dev("b", ["Go"])]
        gaps = analyze_skill_gaps(devs, ["Rust", "Go"])
        assert gaps.critical_gaps == []
        assert gaps.emerging_needs == ["Rust"]

    def test_critical_gaps_keep_requirement_order(self):
        gaps = analyze_skill_gaps([_dev("a", ["Go"])], ["Zig", "Go", "Elm", "Ada"])
        assert gaps.critical_gaps == ["Zig", "Elm", "Ada"]

    def test_critical_gaps_subset_of_requirements(self):
        reqs = ["Frontend", "Backend", "DevOps", "Database"]
        gaps = analyze_skill_gaps(_scenario_a(), reqs)
        assert set(gaps.critical_gaps) <= set(reqs)

    def test_recommendations_follow_gaps_then_needs(self):
        devs = [_dev("a", ["Rust"])]
        gaps = analyze_skill_gaps(devs, ["Rust", "DevOps"])
        assert gaps.recommendations == [
            "Hire or train for DevOps",
            "Cross-train a second developer in Rust",
        ]

    def test_empty_requirements(self):
        gaps = analyze_skill_gaps(_scenario_a(), [])
        assert gaps.critical_gaps == []
        assert gaps.emerging_needs == []
        assert gaps.recommendations == []

    def test_empty_roster_everything_critical(self):
        gaps = analyze_skill_gaps([], ["Frontend"])
        assert gaps.critical_gaps == ["Frontend"]

    def test_overrepresented_skill(self):
        devs = [_dev(f"d{i}", ["Frontend"]) for i in range(4)]
        gaps = analyze_skill_gaps(devs, [])
        assert gaps.overrepresented == ["Frontend"]

    def test_small_team_never_overrepresented(self):
        devs = [_dev(f"d{i}", ["Frontend"]) for i in range(3)]
        assert analyze_skill_gaps(devs, []).overrepresented == []


class TestSkillGapDetails:
    def test_one_entry_per_requirement_in_order(self):
        details = analyze_skill_gap_details(_scenario_a(), ["DevOps", "Frontend", "Backend"])
        assert [d.skill for d in details] == ["DevOps", "Frontend", "Backend"]

    def test_uncovered_skill(self):
        (detail,) = analyze_skill_gap_details(_scenario_a(), ["DevOps"])
        assert detail.current_level == 0
        assert detail.required_level == 8
        assert detail.gap == 8
        assert detail.impact == "critical"
        assert detail.developers_with_skill == []
        assert detail.training_recommendations == [
            "Training needed for DevOps",
            "Hire a developer experienced in DevOps",
        ]

    def test_holders_in_roster_order(self):
        devs = [_dev("c", ["Go"], 4), _dev("a", ["Go"], 9), _dev("b", ["Rust"])]
        (detail,) = analyze_skill_gap_details(devs, ["Go"])
        assert [(h.developer_id, h.proficiency) for h in detail.developers_with_skill] == [
            ("c", 4),
            ("a", 9),
        ]
        assert detail.current_level == 9
        assert detail.gap == 0
        assert detail.impact == "medium"
        assert detail.training_recommendations == []

    def test_single_holder_below_required_level(self):
        (detail,) = analyze_skill_gap_details([_dev("a", ["Rust"], 6)], ["Rust"])
        assert detail.impact == "high"
        assert detail.gap == 2
        assert detail.training_recommendations == [
            "Pair A with a second developer on Rust",
            "Raise Rust proficiency to 8",
        ]

    def test_impact_falls_with_coverage(self):
        devs = [_dev(x, ["Go"], 9) for x in "abc"]
        (detail,) = analyze_skill_gap_details(devs, ["Go"])
        assert detail.impact == "low"

    def test_levels_from_settings(self):
        cfg = OptimizerSettings(required_skill_level=10, well_covered_holders=2)
        devs = [_dev("a", ["Go"], 9), _dev("b", ["Go"], 7)]
        (detail,) = analyze_skill_gap_details(devs, ["Go"], cfg)
        assert detail.gap == 1
        assert detail.impact == "low"

    def test_empty_requirements(self):
        assert analyze_skill_gap_details(_scenario_a(), []) == []
