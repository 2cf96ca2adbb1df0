import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.utils.skill_matcher import calculate_skill_overlap, merge_skills


def test_empty_required_returns_zero():
    overlap = calculate_skill_overlap([], ["python"])
    assert overlap.percentage == 0
    assert overlap.matched_skills == []


def test_empty_candidate_returns_zero():
    overlap = calculate_skill_overlap(["python", "django"], [])
    assert overlap.percentage == 0
    assert overlap.required_count == 2


def test_half_of_required_skills_matched():
    overlap = calculate_skill_overlap(["React", "Node.js"], ["react", "express"])
    assert overlap.matched_skills == ["React"]
    assert overlap.rounded_percentage == 50


def test_no_common_skill():
    overlap = calculate_skill_overlap(["Kubernetes"], ["react", "node"])
    assert overlap.percentage == 0


def test_substring_match_is_symmetric():
    # 需求較長或候選人較長都算符合
    assert calculate_skill_overlap(["Node.js"], ["node"]).percentage == 100
    assert calculate_skill_overlap(["Node"], ["node.js"]).percentage == 100


def test_duplicate_required_skills_count_once():
    overlap = calculate_skill_overlap(["Python", "python", "Go"], ["python"])
    assert overlap.required_count == 2
    assert overlap.rounded_percentage == 50


def test_percentage_stays_in_range():
    overlap = calculate_skill_overlap(["SQL"], ["MySQL", "PostgreSQL", "SQLite"])
    assert 0 <= overlap.percentage <= 100
    assert overlap.matched_count == 1


def test_rounding():
    overlap = calculate_skill_overlap(["a1", "b2", "c3"], ["a1", "b2"])
    assert overlap.rounded_percentage == 67


def test_merge_skills_keeps_first_seen_order():
    merged = merge_skills([["React", "TypeScript"], ["react", "Go"], None, []])
    assert merged == ["React", "TypeScript", "Go"]
