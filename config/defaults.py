"""Fallback values used when external data is missing or invalid."""

DEFAULT_RENT = 30000
DEFAULT_PRICE_PER_SQ_FT = 8000
DEFAULT_MARKET_TREND = "stable"
DEFAULT_AVAILABILITY = 75

DEFAULT_SAFETY_SCORE = 3.5
DEFAULT_CRIME_RATE = 2.0
DEFAULT_RECENT_INCIDENTS = 10

DEFAULT_WALK_SCORE = 70
DEFAULT_TRANSIT_SCORE = 65
DEFAULT_BIKE_SCORE = 60
DEFAULT_NEARBY_STATIONS = ["Metro Station", "Bus Stop"]
DEFAULT_TRANSIT_RATING = 3.5

DEFAULT_SCHOOL_RATING = 3.8
DEFAULT_TOP_SCHOOLS = ["Local School"]
DEFAULT_STUDENT_TEACHER_RATIO = 20

DEFAULT_POPULATION = 50000
DEFAULT_MEDIAN_AGE = 35
DEFAULT_MEDIAN_INCOME = 800000
DEFAULT_DIVERSITY_INDEX = 0.7

DEFAULT_AMENITIES = {
    "restaurants": 20,
    "shopping": 15,
    "healthcare": 10,
    "recreation": 12,
}

# Listing used when there is nothing at all to derive a record from
DEFAULT_LISTING = {
    "id": "unknown",
    "name": "Unknown",
    "city": "Unknown",
    "state": "Unknown",
    "coordinates": {"lat": 0.0, "lng": 0.0},
    "price_range": {"min": 30000, "max": 50000},
    "ratings": {
        "overall": 3.5,
        "safety": 3.5,
        "schools": 3.5,
        "transit": 3.5,
        "nightlife": 3.5,
        "cost": 3.5,
    },
    "demographics": {
        "population": DEFAULT_POPULATION,
        "median_age": DEFAULT_MEDIAN_AGE,
        "median_income": DEFAULT_MEDIAN_INCOME,
    },
}

# Quality attached to records that exhausted their retries
DEGRADED_QUALITY = {
    "completeness": 0.6,
    "accuracy": 0.5,
    "freshness": 1.0,
    "consistency": 0.7,
    "overall": 0.7,
}

# Per-city base figures for the simulated data source
CITY_BASE_RENT = {
    "Mumbai": 45000,
    "Bangalore": 35000,
    "Delhi": 40000,
    "Gurgaon": 38000,
    "Noida": 30000,
    "Hyderabad": 32000,
    "Kolkata": 25000,
}

CITY_BASE_PRICE_PER_SQ_FT = {
    "Mumbai": 25000,
    "Bangalore": 8000,
    "Delhi": 15000,
    "Gurgaon": 12000,
    "Noida": 7000,
    "Hyderabad": 6000,
    "Kolkata": 5000,
}

CITY_BASE_CRIME_RATE = {
    "Mumbai": 2.1,
    "Bangalore": 1.8,
    "Delhi": 3.2,
    "Gurgaon": 2.5,
    "Noida": 2.0,
    "Hyderabad": 1.9,
    "Kolkata": 2.8,
}

CITY_BASE_SCHOOL_RATING = {
    "Mumbai": 4.2,
    "Bangalore": 4.3,
    "Delhi": 4.0,
    "Gurgaon": 4.1,
    "Noida": 3.9,
    "Hyderabad": 4.0,
    "Kolkata": 3.8,
}

# (trend, cumulative probability)
MARKET_TREND_ODDS = [("rising", 0.4), ("stable", 0.9), ("falling", 1.0)]

STATION_TYPES = ["Metro", "Bus", "Railway"]
STATION_NAMES = ["Central", "Junction", "Park", "Market", "City", "East", "West", "North", "South"]
SCHOOL_TYPES = ["Public School", "International School", "Convent School", "Academy"]
SCHOOL_NAMES = ["St. Mary's", "Delhi Public", "Ryan International", "Kendriya Vidyalaya", "Modern"]

# Known places served when GeoNames is unreachable or mocked
FALLBACK_PLACES = {
    "koramangala": {"lat": 12.9352, "lng": 77.6245, "name": "Koramangala", "country_name": "India", "admin_name": "Karnataka", "population": 85000},
    "bandra": {"lat": 19.0596, "lng": 72.8295, "name": "Bandra West", "country_name": "India", "admin_name": "Maharashtra", "population": 120000},
    "powai": {"lat": 19.1176, "lng": 72.9060, "name": "Powai", "country_name": "India", "admin_name": "Maharashtra", "population": 110000},
    "connaught place": {"lat": 28.6315, "lng": 77.2167, "name": "Connaught Place", "country_name": "India", "admin_name": "Delhi", "population": 95000},
    "cyber city": {"lat": 28.4595, "lng": 77.0266, "name": "Cyber City", "country_name": "India", "admin_name": "Haryana", "population": 150000},
    "sector 62": {"lat": 28.6139, "lng": 77.3910, "name": "Sector 62", "country_name": "India", "admin_name": "Uttar Pradesh", "population": 125000},
    "bangalore": {"lat": 12.9716, "lng": 77.5946, "name": "Bangalore", "country_name": "India", "admin_name": "Karnataka", "population": 8443675},
    "mumbai": {"lat": 19.0760, "lng": 72.8777, "name": "Mumbai", "country_name": "India", "admin_name": "Maharashtra", "population": 12442373},
    "delhi": {"lat": 28.6139, "lng": 77.2090, "name": "Delhi", "country_name": "India", "admin_name": "Delhi", "population": 16787941},
    "gurgaon": {"lat": 28.4595, "lng": 77.0266, "name": "Gurgaon", "country_name": "India", "admin_name": "Haryana", "population": 876969},
    "noida": {"lat": 28.5355, "lng": 77.3910, "name": "Noida", "country_name": "India", "admin_name": "Uttar Pradesh", "population": 642381},
}
