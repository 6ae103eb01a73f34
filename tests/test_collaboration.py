"""Tests for team_optimizer/engine/collaboration.py."""

from team_optimizer.engine.collaboration import analyze_collaboration, pairing_benefit
from team_optimizer.engine.signals import CollaborationSignalSource, ProfileSignalSource
from team_optimizer.models import Developer, DeveloperProfile
from team_optimizer.settings import OptimizerSettings


def _dev(
    dev_id: str,
    strengths: list[str],
    collaboration: int = 5,
    code_quality: int = 7,
    preferred=None,
) -> Developer:
    return Developer(
        id=dev_id,
        name=dev_id.upper(),
        profile=DeveloperProfile(
            strengths=strengths,
            collaboration=collaboration,
            code_quality=code_quality,
            preferred_tasks=preferred or [],
        ),
    )


class FixedSignals:
    """Signal source with explicit scores and no peers."""

    def __init__(self, scores: dict[str, float]) -> None:
        self.scores = scores

    def interaction_score(self, developer: Developer) -> float:
        return self.scores[developer.id]

    def peers(self, developer: Developer, roster: list[Developer]) -> list[Developer]:
        return [d for d in roster if d.id != developer.id]


class TestSignals:
    def test_profile_source_satisfies_protocol(self):
        assert isinstance(ProfileSignalSource(), CollaborationSignalSource)

    def test_peers_share_a_strength(self):
        a = _dev("a", ["Go", "Rust"])
        b = _dev("b", ["Rust"])
        c = _dev("c", ["Elm"])
        assert ProfileSignalSource().peers(a, [a, b, c]) == [b]


class TestCommunicationPatterns:
    def test_scenario_c_shared_rust_low_sharer_is_bottleneck(self):
        devs = [
            _dev("d1", ["Rust"], collaboration=9),
            _dev("d2", ["Rust"], collaboration=2),
        ]
        patterns = analyze_collaboration(devs).communication_patterns
        assert patterns.bottlenecks == ["D2"]
        assert "D1" not in patterns.bottlenecks

    def test_low_collaboration_sole_holder_is_bottleneck(self):
        devs = [
            _dev("a", ["Rust"], collaboration=9),
            _dev("b", ["Go"], collaboration=2),
        ]
        patterns = analyze_collaboration(devs).communication_patterns
        assert patterns.bottlenecks == ["B"]
        assert "A" not in patterns.bottlenecks

    def test_connector_needs_two_peers(self):
        devs = [
            _dev("a", ["Frontend", "Backend"], collaboration=9),
            _dev("b", ["Frontend"]),
            _dev("c", ["Backend"]),
        ]
        patterns = analyze_collaboration(devs).communication_patterns
        assert patterns.connectors == ["A"]

    def test_high_score_without_overlap_is_not_connector(self):
        devs = [
            _dev("a", ["Frontend"], collaboration=10),
            _dev("b", ["Frontend"]),
            _dev("c", ["Backend"]),
        ]
        assert analyze_collaboration(devs).communication_patterns.connectors == []

    def test_isolated(self):
        devs = [
            _dev("a", ["Go"], collaboration=3),
            _dev("b", ["Go"], collaboration=4),
            _dev("c", ["Go"], collaboration=1),
        ]
        assert analyze_collaboration(devs).communication_patterns.isolated == ["A", "C"]

    def test_shared_skill_holder_is_not_bottleneck(self):
        devs = [_dev("a", ["Go"], collaboration=2), _dev("b", ["Go"], collaboration=2)]
        assert analyze_collaboration(devs).communication_patterns.bottlenecks == []

    def test_custom_signal_source(self):
        devs = [_dev("a", ["Go"]), _dev("b", ["Rust"]), _dev("c", ["Elm"])]
        signals = FixedSignals({"a": 9, "b": 5, "c": 1})
        patterns = analyze_collaboration(devs, signals=signals).communication_patterns
        assert patterns.connectors == ["A"]
        assert patterns.isolated == ["C"]
        assert patterns.bottlenecks == ["B", "C"]


class TestKnowledgeSharing:
    def test_singleton_skills_team_wide(self):
        devs = [_dev("a", ["Go", "Rust"]), _dev("b", ["Go", "Elm"])]
        assert analyze_collaboration(devs).knowledge_sharing_needs == ["Rust", "Elm"]

    def test_skill_shared_only_with_a_connector_still_needs_sharing(self):
        devs = [_dev("a", ["Rust"], collaboration=9), _dev("b", ["Rust"], collaboration=2)]
        assert analyze_collaboration(devs).knowledge_sharing_needs == ["Rust"]

    def test_skill_spread_by_high_sharers_needs_nothing(self):
        devs = [_dev("a", ["Rust"], collaboration=9), _dev("b", ["Rust"], collaboration=8)]
        assert analyze_collaboration(devs).knowledge_sharing_needs == []

    def test_empty_roster(self):
        insights = analyze_collaboration([])
        assert insights.knowledge_sharing_needs == []
        assert insights.pair_programming_opportunities == []
        assert insights.communication_patterns.connectors == []


class TestPairProgramming:
    def test_benefit_rises_with_quality(self):
        assert pairing_benefit(9, 2, 1.0) > pairing_benefit(6, 2, 1.0)

    def test_benefit_rises_with_scarcity(self):
        assert pairing_benefit(8, 1, 1.0) > pairing_benefit(8, 3, 1.0)

    def test_sole_holder_benefit_equals_code_quality(self):
        assert pairing_benefit(8, 1, 1.0) == 8.0

    def test_mentee_must_share_preferred_task_type(self):
        devs = [
            _dev("m", ["Rust"], code_quality=10, preferred=["feature"]),
            _dev("n", [], preferred=["feature"]),
            _dev("o", [], preferred=["docs"]),
        ]
        pairs = analyze_collaboration(devs).pair_programming_opportunities
        assert [(p.mentor, p.mentee, p.skill, p.benefit) for p in pairs] == [("M", "N", "Rust", 10.0)]

    def test_ordered_by_benefit_with_stable_ties(self):
        devs = [
            _dev("a", ["Rust", "Go"], code_quality=8, preferred=["feature"]),
            _dev("b", ["Go"], code_quality=6, preferred=["feature"]),
            _dev("c", [], preferred=["feature"]),
        ]
        pairs = analyze_collaboration(devs).pair_programming_opportunities
        assert [(p.mentor, p.mentee, p.skill, p.benefit) for p in pairs] == [
            ("A", "B", "Rust", 8.0),
            ("A", "C", "Rust", 8.0),
            ("A", "C", "Go", 6.0),
            ("B", "C", "Go", 4.5),
        ]

    def test_capped_at_max_pairings(self):
        devs = [
            _dev(f"d{i}", [f"skill{i}a", f"skill{i}b"], preferred=["feature"])
            for i in range(10)
        ]
        pairs = analyze_collaboration(devs).pair_programming_opportunities
        assert len(pairs) == 5
        assert [(p.mentor, p.mentee) for p in pairs[:2]] == [("D0", "D1"), ("D0", "D2")]

    def test_max_pairings_setting(self):
        devs = [_dev(f"d{i}", [f"s{i}"], preferred=["bug"]) for i in range(4)]
        cfg = OptimizerSettings(max_pairings=2)
        assert len(analyze_collaboration(devs, cfg).pair_programming_opportunities) == 2
        cfg = OptimizerSettings(max_pairings=0)
        assert analyze_collaboration(devs, cfg).pair_programming_opportunities == []

    def test_names_exist_in_roster(self):
        devs = [
            _dev("a", ["Rust"], collaboration=9, preferred=["bug"]),
            _dev("b", ["Go"], collaboration=2, preferred=["bug"]),
        ]
        insights = analyze_collaboration(devs)
        names = {d.name for d in devs}
        for p in insights.pair_programming_opportunities:
            assert {p.mentor, p.mentee} <= names
        patterns = insights.communication_patterns
        assert set(patterns.connectors + patterns.isolated + patterns.bottlenecks) <= names
