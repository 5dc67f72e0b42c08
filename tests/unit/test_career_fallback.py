"""
Unit Tests for rule-based career suggestions
Tests for: keyword rules per task, default suggestion, mood detection, insight text
"""
import pytest

from udaan.services.career_fallback import detect_mood, generate_fallback
from udaan.services.career_response import is_valid_career_response

from conftest import career_request


def titles(result):
    return [career.title for career in result.careers]


class TestKeywordRules:
    """Test which suggestions each interest/skill keyword produces"""

    def test_software_interest_explore(self):
        result = generate_fallback(career_request(interests="software", context={"task": "explore"}))
        assert "Software Developer" in titles(result)

    def test_python_skill_skills_task(self):
        result = generate_fallback(career_request(skills="Python", context={"task": "skills"}))
        assert titles(result) == ["DevOps Engineer"]

    def test_design_industry(self):
        result = generate_fallback(career_request(interests="Creative work", context={"task": "industry"}))
        assert titles(result) == ["Product Designer"]

    def test_data_opportunities(self):
        result = generate_fallback(career_request(skills="SQL", context={"task": "opportunities"}))
        assert titles(result) == ["Business Analyst"]

    def test_leadership_skills(self):
        result = generate_fallback(career_request(skills="leadership", context={"task": "skills"}))
        assert titles(result) == ["Junior Project Manager"]

    def test_rules_fire_independently(self):
        result = generate_fallback(career_request(
            interests="software and design",
            skills="sql, management",
            context={"task": "explore"},
        ))
        assert titles(result) == [
            "Software Developer",
            "UX/UI Designer",
            "Business Analyst",
            "Project Coordinator",
        ]

    def test_task_defaults_to_explore(self):
        result = generate_fallback(career_request(interests="tech"))
        assert titles(result) == ["Software Developer"]

    def test_query_type_used_when_task_missing(self):
        result = generate_fallback(career_request(interests="tech", context={"queryType": "Skills"}))
        assert titles(result) == ["DevOps Engineer"]

    def test_task_is_case_insensitive(self):
        result = generate_fallback(career_request(interests="tech", context={"task": "EXPLORE"}))
        assert titles(result) == ["Software Developer"]


class TestDefaultSuggestion:
    """Test the single suggestion used when no rule fires"""

    def test_courses_task_gives_marketing(self):
        result = generate_fallback(career_request(interests="cooking", context={"task": "courses"}))
        assert titles(result) == ["Digital Marketing Specialist"]

    def test_marketing_interest_gives_marketing(self):
        result = generate_fallback(career_request(interests="marketing", context={"task": "roadmap"}))
        assert titles(result) == ["Digital Marketing Specialist"]

    def test_design_without_matching_task_gives_designer(self):
        result = generate_fallback(career_request(skills="design", context={"task": "roadmap"}))
        assert titles(result) == ["UX/UI Designer"]
        assert result.careers[0].why == "Aligns with creative and visual skills."
        assert result.careers[0].steps == [
            "Learn design fundamentals", "Build a mini-portfolio", "Seek feedback from peers",
        ]

    def test_nothing_matches_gives_project_coordinator(self):
        result = generate_fallback(career_request(interests="gardening", context={"task": "roadmap"}))
        assert titles(result) == ["Project Coordinator"]

    def test_exactly_one_default_suggestion(self):
        result = generate_fallback(career_request(context={"task": "courses"}))
        assert len(result.careers) == 1

    @pytest.mark.parametrize("task", ["explore", "skills", "industry", "courses", "opportunities", "roadmap", "other"])
    def test_always_at_least_one_valid_career(self, task):
        result = generate_fallback(career_request(context={"task": task}))
        assert len(result.careers) >= 1
        assert is_valid_career_response(result)


class TestMoodDetection:
    """Test mood tag derived from the mindset text"""

    def test_anxious(self):
        result = generate_fallback(career_request(mindset="anxious and stressed", context={"task": "explore"}))
        assert result.mood == "😟 Anxious"

    def test_unsure(self):
        assert detect_mood("I feel a bit lost") == "🤔 Unsure"

    def test_hopeful(self):
        assert detect_mood("Optimistic about the future") == "😌 Hopeful"

    def test_neutral_default(self):
        assert detect_mood("") == "😌 Neutral"
        assert detect_mood("just graduated") == "😌 Neutral"

    def test_last_matching_rule_wins(self):
        assert detect_mood("confused but hopeful") == "😌 Hopeful"
        assert detect_mood("hopeful yet worried") == "😟 Anxious"


class TestInsight:
    """Test insight text"""

    def test_mentions_inputs_and_task(self):
        result = generate_fallback(career_request(
            interests="software", mindset="curious", context={"task": "skills"},
        ))
        assert '"curious"' in result.insight
        assert 'interests="software"' in result.insight
        assert "skills focus" in result.insight

    def test_unspecified_inputs(self):
        result = generate_fallback(career_request())
        assert '"unspecified"' in result.insight
        assert 'interests="unspecified"' in result.insight

    def test_cleans_quoted_inputs(self):
        result = generate_fallback(career_request(interests='"software"'))
        assert 'interests="software"' in result.insight
        assert titles(result) == ["Software Developer"]
