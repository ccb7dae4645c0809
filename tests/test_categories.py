"""Tests for the category scorers."""

import pytest

from models.enums import AgeGroup
from models.neighborhood import Coordinates
from models.preferences import UserPreferences
from scoring.categories import (
    haversine_distance,
    score_affordability,
    score_commute,
    score_convenience,
    score_lifestyle,
    score_safety,
)


def prefs(**kwargs) -> UserPreferences:
    kwargs.setdefault("budget", 30000)
    return UserPreferences(**kwargs)


class TestScoreAffordability:
    def test_well_under_budget(self, make_record):
        assert score_affordability(make_record(rent=15000), prefs()) == 1.0

    def test_two_thirds_of_budget(self, make_record):
        assert score_affordability(make_record(rent=20000), prefs()) == 0.9

    def test_at_budget(self, make_record):
        assert score_affordability(make_record(rent=30000), prefs()) == 0.6

    def test_slightly_over_budget(self, make_record):
        assert score_affordability(make_record(rent=34000), prefs()) == 0.3

    def test_way_over_budget(self, make_record):
        assert score_affordability(make_record(rent=60000), prefs()) == 0.1

    def test_lower_rent_never_scores_lower(self, make_record):
        rents = [70000, 40000, 33000, 30000, 26000, 21000, 17000, 9000]
        scores = [score_affordability(make_record(rent=r), prefs()) for r in rents]
        assert scores == sorted(scores)

    def test_higher_budget_never_scores_lower(self, make_record):
        record = make_record(rent=30000)
        budgets = [10000, 25000, 30000, 35000, 45000, 80000]
        scores = [score_affordability(record, prefs(budget=b)) for b in budgets]
        assert scores == sorted(scores)

    def test_bad_input_returns_neutral(self, make_record):
        broken = UserPreferences.model_construct(budget=0)
        assert score_affordability(make_record(), broken) == 0.5


class TestScoreSafety:
    def test_very_safe_is_clamped(self, make_record):
        record = make_record(safety_score=4.5, crime_rate=1.0, recent_incidents=2)
        assert score_safety(record, prefs()) == 1.0

    def test_average_area(self, make_record):
        assert score_safety(make_record(), prefs()) == pytest.approx(0.8)

    def test_high_crime_penalties(self, make_record):
        record = make_record(safety_score=2.5, crime_rate=3.5, recent_incidents=20)
        assert score_safety(record, prefs()) == pytest.approx(0.25)

    def test_family_bonus_only_above_threshold(self, make_record):
        safe = make_record(safety_score=4.5)
        assert score_safety(safe, prefs(age_group=AgeGroup.FAMILY)) == pytest.approx(0.95)
        assert score_safety(safe, prefs()) == pytest.approx(0.9)

        average = make_record(safety_score=3.0)
        assert score_safety(average, prefs(age_group=AgeGroup.FAMILY)) == pytest.approx(0.6)

    def test_higher_safety_score_never_scores_lower(self, make_record):
        values = [0.0, 1.0, 2.5, 3.5, 4.0, 4.5, 5.0]
        scores = [score_safety(make_record(safety_score=v), prefs()) for v in values]
        assert scores == sorted(scores)


class TestScoreConvenience:
    def test_weighted_components(self, make_record):
        # transit 135/200*0.4 + amenities 45/150*0.4 + schools 3.8/5*0.2
        assert score_convenience(make_record(), prefs()) == pytest.approx(0.542)

    def test_walkable_bonus(self, make_record):
        score = score_convenience(make_record(), prefs(lifestyle=["walkable"]))
        assert score == pytest.approx(0.612)

    def test_clamped_to_one(self, make_record):
        record = make_record(walk_score=100, transit_score=100, restaurants=300, school_rating=5)
        assert score_convenience(record, prefs(lifestyle=["walkable"])) == 1.0


class TestScoreLifestyle:
    def test_young_professional_match(self, make_record):
        record = make_record(median_age=30, restaurants=30)
        assert score_lifestyle(record, prefs()) == pytest.approx(0.85)

    def test_family_match(self, make_record):
        record = make_record(median_age=40, school_rating=4.5)
        assert score_lifestyle(record, prefs(age_group=AgeGroup.FAMILY)) == pytest.approx(0.85)

    def test_senior_has_no_age_bonus(self, make_record):
        record = make_record(median_age=30, restaurants=30)
        assert score_lifestyle(record, prefs(age_group=AgeGroup.SENIOR)) == 0.5

    def test_nightlife_tag(self, make_record):
        record = make_record(median_age=50, restaurants=21)
        assert score_lifestyle(record, prefs(lifestyle=["nightlife"])) == pytest.approx(0.6)

    def test_family_friendly_tag(self, make_record):
        record = make_record(median_age=50, school_rating=3.9)
        score = score_lifestyle(record, prefs(age_group=AgeGroup.SENIOR, lifestyle=["family-friendly"]))
        assert score == pytest.approx(0.65)

    def test_all_bonuses_clamped(self, make_record):
        record = make_record(median_age=30, restaurants=30, price_per_sq_ft=9000, rent=20000)
        preferences = prefs(lifestyle=["modern", "affordable", "nightlife"])
        assert score_lifestyle(record, preferences) == 1.0


class TestScoreCommute:
    def test_no_work_location_is_neutral(self, make_record):
        assert score_commute(make_record(), prefs()) == 0.7

    def test_no_coordinates_is_neutral(self, make_record):
        record = make_record(listing_overrides={"coordinates": None})
        work = Coordinates(lat=12.97, lng=77.59)
        assert score_commute(record, prefs(work_location=work)) == 0.7

    def test_next_door(self, make_record):
        work = Coordinates(lat=12.9352, lng=77.6245)
        assert score_commute(make_record(), prefs(work_location=work)) == 1.0

    def test_mid_distance_with_transit_bonus(self, make_record):
        # 0.1 degrees of latitude is about 11.1 km
        work = Coordinates(lat=13.0352, lng=77.6245)
        assert score_commute(make_record(), prefs(work_location=work)) == pytest.approx(0.7)
        assert score_commute(make_record(transit_score=80), prefs(work_location=work)) == pytest.approx(0.8)

    def test_different_city(self, make_record):
        work = Coordinates(lat=19.0596, lng=72.8295)
        assert score_commute(make_record(), prefs(work_location=work)) == pytest.approx(0.1)


class TestHaversineDistance:
    def test_same_point(self):
        point = Coordinates(lat=28.6315, lng=77.2167)
        assert haversine_distance(point, point) == 0

    def test_connaught_place_to_saket(self):
        distance = haversine_distance(
            Coordinates(lat=28.6315, lng=77.2167),
            Coordinates(lat=28.5245, lng=77.2066),
        )
        assert 11 < distance < 13

    def test_symmetric(self):
        a = Coordinates(lat=12.9352, lng=77.6245)
        b = Coordinates(lat=19.0596, lng=72.8295)
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))
