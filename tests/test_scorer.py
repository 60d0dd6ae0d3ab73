"""Tests for the scorer."""

import pytest

from check_ai.core.checks import CheckDefinition, CheckType, Finding
from check_ai.core.scorer import (
    DEFAULT_SECTION_ORDER,
    Scorer,
    get_recommendations,
    round_half_up,
    tier_for,
)


def finding(check_id: str, weight: int, found: bool, section: str = "Repo Hygiene") -> Finding:
    check = CheckDefinition(
        id=check_id,
        label=check_id,
        section=section,
        weight=weight,
        type=CheckType.FILE,
        description="",
        paths=("x",),
    )
    return Finding(check=check, found=found)


class TestRounding:
    """Tests for rounding helpers."""

    @pytest.mark.parametrize("value, digits, expected", [
        (2.5, 0, 3.0),
        (3.5, 0, 4.0),
        (0.25, 1, 0.3),
        (6.45, 1, 6.5),
        (6.44, 1, 6.4),
        (10.0, 1, 10.0),
    ])
    def test_round_half_up(self, value, digits, expected):
        """Test that halves always round up."""
        assert round_half_up(value, digits) == expected

    @pytest.mark.parametrize("normalized, grade", [
        (10.0, "A+"),
        (9.0, "A+"),
        (8.9, "A"),
        (7.0, "A"),
        (6.9, "B"),
        (5.0, "B"),
        (4.9, "C"),
        (3.0, "C"),
        (2.9, "D"),
        (1.0, "D"),
        (0.9, "F"),
        (0.0, "F"),
    ])
    def test_tier_boundaries(self, normalized, grade):
        """Test that tier minimums are inclusive."""
        assert tier_for(normalized).grade == grade


class TestScorer:
    """Tests for Scorer class."""

    def test_weighted_score(self):
        """Test earned/max and normalization to one decimal."""
        findings = [
            finding("a", 10, True),
            finding("b", 5, False),
            finding("c", 6, True),
        ]

        score = Scorer().score(findings)

        assert score.earned_points == 16
        assert score.max_points == 21
        # 16 / 21 * 10 = 7.619...
        assert score.normalized == 7.6
        assert score.grade == "A"
        assert score.found_count == 2
        assert score.total_checks == 3

    def test_grade_uses_rounded_score(self):
        """Test that a score rounding up to a boundary gets the higher grade."""
        # 299 / 1000 * 10 = 2.99, rounds to 3.0
        findings = (
            [finding("a", 13, True)] * 23
            + [finding("b", 20, False)] * 35
            + [finding("c", 1, False)]
        )

        score = Scorer().score(findings)

        assert score.normalized == 3.0
        assert score.grade == "C"
        assert score.is_ready is True

    def test_no_findings(self):
        """Test that zero max points score zero."""
        score = Scorer().score([])

        assert score.normalized == 0.0
        assert score.grade == "F"
        assert score.is_ready is False

    def test_only_zero_weight_findings(self):
        """Test that weight-0 checks never change the score."""
        score = Scorer().score([finding("a", 0, True), finding("b", 0, False)])

        assert score.max_points == 0
        assert score.normalized == 0.0

    def test_perfect_score(self):
        """Test the upper bound."""
        score = Scorer().score([finding("a", 20, True), finding("b", 3, True)])

        assert score.normalized == 10.0
        assert score.grade == "A+"
        assert score.label.startswith("Exemplary")

    def test_sections_are_seeded_in_order(self):
        """Test that fixed sections appear even when empty, followed by others."""
        findings = [
            finding("mcp", 2, True, section="MCP"),
            finding("clio", 3, False, section="CLIO"),
        ]

        sections = Scorer().score(findings).sections

        assert list(sections)[:len(DEFAULT_SECTION_ORDER)] == list(DEFAULT_SECTION_ORDER)
        assert list(sections)[-1] == "CLIO"
        assert sections["Testing"].items == []
        assert sections["MCP"].earned == 2
        assert sections["CLIO"].max == 3

    def test_section_percentage(self):
        """Test rounded section percentages."""
        findings = [
            finding("a", 1, True),
            finding("b", 1, True),
            finding("c", 1, False),
        ]

        section = Scorer().score(findings).sections["Repo Hygiene"]

        assert section.percentage == 67
        assert section.to_dict()["pct"] == 67
        assert section.to_dict()["items"] == ["a", "b", "c"]

    def test_empty_section_percentage(self):
        """Test that a section without points reports 0%."""
        assert Scorer().score([]).sections["MCP"].percentage == 0

    def test_custom_threshold(self):
        """Test a configurable readiness threshold."""
        findings = [finding("a", 1, True), finding("b", 1, False)]

        assert Scorer(readiness_threshold=5.0).score(findings).is_ready is True
        assert Scorer(readiness_threshold=6.0).score(findings).is_ready is False

    def test_to_dict(self):
        """Test score serialization."""
        data = Scorer().score([finding("a", 4, True)]).to_dict()

        assert data["normalized"] == 10.0
        assert data["grade"] == "A+"
        assert data["sections"]["Repo Hygiene"]["earned"] == 4


class TestRecommendations:
    """Tests for get_recommendations."""

    def test_buckets(self):
        """Test that missing checks are bucketed by weight."""
        findings = [
            finding("critical", 10, False),
            finding("important", 5, False),
            finding("nice", 3, False),
            finding("tiny", 2, False),
            finding("passed", 10, True),
        ]

        recommendations = get_recommendations(findings)

        assert [f.id for f in recommendations["critical"]] == ["critical"]
        assert [f.id for f in recommendations["important"]] == ["important"]
        assert "nice" not in recommendations

    def test_nice_to_have(self):
        """Test the optional low-impact bucket."""
        findings = [finding("nice", 4, False), finding("tiny", 2, False)]

        recommendations = get_recommendations(findings, include_nice_to_have=True)

        assert [f.id for f in recommendations["nice"]] == ["nice"]
