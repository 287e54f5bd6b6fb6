"""Gamification Rules: defaults, immutability, construction-time validation."""

import dataclasses

import pytest

from foodloop.core.gamification_rules import GamificationRules, DEFAULT_RULES


def test_default_schedule():
    assert DEFAULT_RULES.points_per_level == 100
    assert DEFAULT_RULES.donation_created_points == 10
    assert DEFAULT_RULES.delivery_completed_points == 15
    assert DEFAULT_RULES.compost_completed_points == 20
    assert DEFAULT_RULES.badge_bonus_points == 50


def test_rules_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_RULES.badge_bonus_points = 0


def test_zero_points_per_level_rejected():
    with pytest.raises(ValueError, match="points_per_level"):
        GamificationRules(points_per_level=0)


def test_negative_award_rejected():
    with pytest.raises(ValueError, match="compost_completed_points"):
        GamificationRules(compost_completed_points=-1)


def test_zero_award_allowed():
    assert GamificationRules(badge_bonus_points=0).badge_bonus_points == 0
