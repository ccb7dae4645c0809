"""Tests for the seed listing loader."""

import json

import pytest

from parsers.listing_loader import load_listings, parse_listings


class TestLoadListings:
    def test_bundled_seed_data(self):
        listings = load_listings()
        assert len(listings) == 7
        koramangala = listings[0]
        assert koramangala.name == "Koramangala"
        assert koramangala.price_range.midpoint == 35000
        assert koramangala.demographics.median_age == 28
        assert koramangala.reviews[0].user_name == "Priya Sharma"
        assert all(listing.coordinates is not None for listing in listings)

    def test_invalid_entries_skipped(self):
        listings = parse_listings(
            [
                {"id": "ok", "name": "Valid", "priceRange": {"min": 1000, "max": 2000}},
                {"id": "bad", "name": "No price"},
                {"id": "bad2", "priceRange": {"min": 1000, "max": 2000}, "ratings": {"safety": 9}},
            ]
        )
        assert [listing.id for listing in listings] == ["ok"]

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(json.dumps({"id": "1"}))
        with pytest.raises(ValueError):
            load_listings(path)

    def test_extra_fields_ignored(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(
            json.dumps([{"id": "1", "name": "A", "priceRange": {"min": 1, "max": 3}, "image": "a.jpg"}])
        )
        assert load_listings(path)[0].price_range.midpoint == 2
