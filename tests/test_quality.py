"""Tests for data quality assessment."""

from datetime import timedelta

import pytest

from ingestion.quality import assess, score_consistency, score_freshness
from ingestion.validator import normalize
from models.neighborhood import DataQuality


class TestAssess:
    def test_clean_record(self, make_payload, make_listing, now):
        record = normalize(make_payload(), now=now).record
        quality = assess(record, make_listing(), now)
        assert quality.completeness == 1.0
        # Listing overall 4.3 agrees with (4.0 + 3.8) / 2
        assert quality.accuracy == 0.9
        assert quality.freshness == 1.0
        assert quality.consistency == 0.9
        assert quality.overall == 0.95
        assert quality.label == "High Quality"

    def test_imputed_fields_lower_completeness(self, make_payload, make_listing, now):
        raw = make_payload()
        del raw["real_estate"]["average_rent"]
        del raw["schools"]["average_rating"]
        record = normalize(raw, now=now).record
        assert assess(record, make_listing(), now).completeness == 0.6

    def test_no_listing_rating_no_bonus(self, make_payload, make_listing, now):
        record = normalize(make_payload(), now=now).record
        listing = make_listing(ratings={})
        assert assess(record, listing, now).accuracy == 0.8

    def test_disagreeing_rating_no_bonus(self, make_payload, make_listing, now):
        record = normalize(make_payload(safety_score=2.0, school_rating=2.0), now=now).record
        assert assess(record, make_listing(), now).accuracy == 0.8

    def test_inputs_untouched(self, make_payload, make_listing, now):
        record = normalize(make_payload(), now=now).record
        listing = make_listing()
        record_before, listing_before = record.model_copy(deep=True), listing.model_copy(deep=True)
        assess(record, listing, now)
        assert record == record_before
        assert listing == listing_before


class TestScoreFreshness:
    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(hours=3), 1.0),
            (timedelta(days=1), 1.0),
            (timedelta(days=5), 0.8),
            (timedelta(days=20), 0.6),
            (timedelta(days=90), 0.4),
        ],
    )
    def test_buckets(self, now, age, expected):
        assert score_freshness(now - age, now) == expected


class TestScoreConsistency:
    def test_plausible(self, make_payload, now):
        assert score_consistency(normalize(make_payload(), now=now).record) == 0.9

    def test_luxury_without_restaurants(self, make_payload, now):
        record = normalize(make_payload(rent=60000, restaurants=5), now=now).record
        assert score_consistency(record) == pytest.approx(0.8)

    def test_both_penalties(self, make_payload, now):
        record = normalize(
            make_payload(rent=60000, restaurants=5, school_rating=4.5, median_age=22), now=now
        ).record
        assert score_consistency(record) == pytest.approx(0.7)


class TestDataQualityLabels:
    @pytest.mark.parametrize(
        "overall, label, low",
        [(0.9, "High Quality", False), (0.8, "High Quality", False), (0.7, "Medium Quality", False), (0.5, "Low Quality", True)],
    )
    def test_label(self, overall, label, low):
        quality = DataQuality(completeness=1, accuracy=1, freshness=1, consistency=1, overall=overall)
        assert quality.label == label
        assert quality.is_low_confidence is low
