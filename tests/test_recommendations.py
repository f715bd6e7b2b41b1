"""Tests for the recommendation model and renderer."""

import io

from rich.console import Console

from enrollment.recommendations import Recommendation, RecommendationRenderer, format_units


def _render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestRecommendationModel:

    def test_minimal_payload(self):
        rec = Recommendation.model_validate({"code": "MATH 20A", "title": "Calculus"})
        assert rec.rmp_rating is None
        assert rec.matching_reviews == []
        assert rec.requirements_fulfilled == []
        assert rec.grade_distribution is None

    def test_null_lists_become_empty(self):
        rec = Recommendation.model_validate({
            "code": "MATH 20A",
            "title": "Calculus",
            "matching_reviews": None,
            "requirements_fulfilled": None,
        })
        assert rec.matching_reviews == []
        assert rec.requirements_fulfilled == []

    def test_extra_fields_ignored(self, sample_recommendation_data):
        rec = Recommendation.model_validate({**sample_recommendation_data, "seats_left": 3})
        assert not hasattr(rec, "seats_left")

    def test_format_units(self):
        assert format_units(4.0) == "4"
        assert format_units(2.5) == "2.5"


class TestRecommendationRenderer:

    def test_full_card(self, sample_recommendation):
        text = _render_text(RecommendationRenderer().render([sample_recommendation]))
        assert "Your Personalized Course Recommendations" in text
        assert "CSE 110: Software Engineering" in text
        assert "Computer Science • 4 units • Prof. Gillespie" in text
        assert "4.2/5.0 RMP" in text
        assert "Why this course matches you:" in text
        assert "Great projects" in text
        assert "Requirements fulfilled: Major Core, Upper Division" in text
        assert "Enroll in CSE 110" in text

    def test_optional_parts_omitted(self):
        rec = Recommendation(code="MATH 20A", title="Calculus", units=4, department="Math", professor="Kane")
        text = _render_text(RecommendationRenderer().render([rec]))
        assert "MATH 20A: Calculus" in text
        assert "RMP" not in text
        assert "Why this course matches you" not in text
        assert "Requirements fulfilled" not in text

    def test_zero_recommendations(self):
        text = _render_text(RecommendationRenderer().render([]))
        assert "Your Personalized Course Recommendations" in text
        assert "No courses matched" in text

    def test_one_card_per_course(self, sample_recommendation):
        other = sample_recommendation.model_copy(update={"code": "CSE 120", "title": "Operating Systems"})
        text = _render_text(RecommendationRenderer().render([sample_recommendation, other]))
        assert text.count("Enroll in ") == 2

    def test_bracketed_text_is_literal(self):
        recs = [
            Recommendation(code="CSE 190", title="Topics [/special] Seminar"),
            Recommendation(code="CSE [191]", title="Topics in [bold] design"),
        ]
        text = _render_text(RecommendationRenderer().render(recs))
        assert "CSE 190: Topics [/special] Seminar" in text
        assert "CSE [191]: Topics in [bold] design" in text
        assert "Enroll in CSE [191]" in text
