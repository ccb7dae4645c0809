from models.base import CamelModel


class GeoLocation(CamelModel):
    lat: float
    lng: float
    name: str = "Unknown"
    country_name: str = "Unknown"
    admin_name: str = "Unknown"
    population: int = 0
