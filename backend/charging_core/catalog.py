"""Default station catalog seeded on first start."""
import logging

from sqlalchemy.orm import Session

from repositories.station_repository import count_stations, create_station, create_station_charger

LOG = logging.getLogger(__name__)

DEFAULT_STATIONS = [
    {"id": "mumbai-1", "name": "Mumbai Central Station", "city": "Mumbai", "address": "Central Mumbai, Maharashtra"},
    {"id": "delhi-1", "name": "Delhi Metro Station", "city": "Delhi", "address": "Connaught Place, New Delhi"},
    {"id": "bangalore-1", "name": "Bangalore Tech Park", "city": "Bangalore", "address": "Electronic City, Bangalore"},
    {"id": "pune-1", "name": "Pune IT Hub", "city": "Pune", "address": "Hinjewadi, Pune"},
    {"id": "hyderabad-1", "name": "Hyderabad HITEC City", "city": "Hyderabad", "address": "HITEC City, Hyderabad"},
    {"id": "chennai-1", "name": "Chennai OMR Station", "city": "Chennai", "address": "OMR, Chennai"},
]

# (name, power rating, status) for each station's chargers.
DEFAULT_CHARGERS = [
    ("Charger 1", "22kW AC", "available"),
    ("Charger 2", "50kW DC", "in-use"),
    ("Charger 3", "22kW AC", "available"),
    ("Charger 4", "50kW DC", "offline"),
]


def station_charger_id(station_id: str, number: int) -> str:
    """Charger ids are scoped by station: mumbai-1 / 2 -> 'mumbai-1-2'."""
    return f"{station_id}-{number}"


def seed_stations_if_empty(session: Session) -> int:
    """Insert the default stations and chargers when the station table is empty. Returns stations added."""
    if count_stations(session) > 0:
        return 0
    for station in DEFAULT_STATIONS:
        create_station(session, station["id"], station["name"], station["city"], station["address"])
        for number, (name, power_rating, status) in enumerate(DEFAULT_CHARGERS, start=1):
            create_station_charger(
                session,
                station_id=station["id"],
                charger_id=station_charger_id(station["id"], number),
                name=name,
                power_rating=power_rating,
                status=status,
            )
    LOG.info("Seeded %d stations", len(DEFAULT_STATIONS))
    return len(DEFAULT_STATIONS)
