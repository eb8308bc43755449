"""
Auction Event Calendar

Generates the monthly auction calendar for all 50 states from a seed derived
from (year, month). The calendar is never stored: the same month always
regenerates the same events, so the UI can toggle the state selector without
a backing table.
"""
import calendar
from datetime import date
from typing import Dict, List, Optional

from src.subasta.generation.seeded_random import seeded_random
from src.subasta.models.auction import AuctionEvent

# Generation order. Changing it reshuffles every calendar.
STATES: List[str] = [
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
]

STATE_CITIES: Dict[str, List[str]] = {
    "CA": ["Los Angeles", "San Francisco", "San Diego", "Sacramento"],
    "TX": ["Houston", "Dallas", "Austin", "San Antonio"],
    "FL": ["Miami", "Orlando", "Tampa", "Jacksonville"],
    "NY": ["New York", "Albany", "Buffalo", "Rochester"],
    "AZ": ["Phoenix", "Tucson", "Mesa", "Scottsdale"],
    "NC": ["Charlotte", "Raleigh", "Greensboro", "Durham"],
    "AL": ["Birmingham", "Montgomery", "Mobile", "Huntsville"],
    "AK": ["Anchorage", "Fairbanks", "Juneau", "Wasilla"],
    "AR": ["Little Rock", "Fort Smith", "Fayetteville", "Springdale"],
    "CO": ["Denver", "Colorado Springs", "Aurora", "Fort Collins"],
    "CT": ["Hartford", "Bridgeport", "New Haven", "Stamford"],
    "DE": ["Wilmington", "Dover", "Newark", "Middletown"],
    "GA": ["Atlanta", "Augusta", "Columbus", "Savannah"],
    "HI": ["Honolulu", "Hilo", "Kailua", "Kaneohe"],
    "ID": ["Boise", "Meridian", "Nampa", "Idaho Falls"],
    "IL": ["Chicago", "Aurora", "Rockford", "Joliet"],
    "IN": ["Indianapolis", "Fort Wayne", "Evansville", "South Bend"],
    "IA": ["Des Moines", "Cedar Rapids", "Davenport", "Sioux City"],
    "KS": ["Wichita", "Overland Park", "Kansas City", "Topeka"],
    "KY": ["Louisville", "Lexington", "Bowling Green", "Owensboro"],
    "LA": ["New Orleans", "Baton Rouge", "Shreveport", "Lafayette"],
    "ME": ["Portland", "Lewiston", "Bangor", "South Portland"],
    "MD": ["Baltimore", "Frederick", "Rockville", "Gaithersburg"],
    "MA": ["Boston", "Worcester", "Springfield", "Lowell"],
    "MI": ["Detroit", "Grand Rapids", "Warren", "Sterling Heights"],
    "MN": ["Minneapolis", "Saint Paul", "Rochester", "Duluth"],
    "MS": ["Jackson", "Gulfport", "Southaven", "Hattiesburg"],
    "MO": ["Kansas City", "Saint Louis", "Springfield", "Independence"],
    "MT": ["Billings", "Missoula", "Great Falls", "Bozeman"],
    "NE": ["Omaha", "Lincoln", "Bellevue", "Grand Island"],
    "NV": ["Las Vegas", "Henderson", "Reno", "North Las Vegas"],
    "NH": ["Manchester", "Nashua", "Concord", "Dover"],
    "NJ": ["Newark", "Jersey City", "Paterson", "Elizabeth"],
    "NM": ["Albuquerque", "Las Cruces", "Rio Rancho", "Santa Fe"],
    "ND": ["Fargo", "Bismarck", "Grand Forks", "Minot"],
    "OH": ["Columbus", "Cleveland", "Cincinnati", "Toledo"],
    "OK": ["Oklahoma City", "Tulsa", "Norman", "Broken Arrow"],
    "OR": ["Portland", "Eugene", "Salem", "Gresham"],
    "PA": ["Philadelphia", "Pittsburgh", "Allentown", "Erie"],
    "RI": ["Providence", "Warwick", "Cranston", "Pawtucket"],
    "SC": ["Charleston", "Columbia", "North Charleston", "Mount Pleasant"],
    "SD": ["Sioux Falls", "Rapid City", "Aberdeen", "Brookings"],
    "TN": ["Nashville", "Memphis", "Knoxville", "Chattanooga"],
    "UT": ["Salt Lake City", "West Valley City", "Provo", "West Jordan"],
    "VT": ["Burlington", "Essex", "South Burlington", "Colchester"],
    "VA": ["Virginia Beach", "Norfolk", "Chesapeake", "Richmond"],
    "WA": ["Seattle", "Spokane", "Tacoma", "Vancouver"],
    "WV": ["Charleston", "Huntington", "Parkersburg", "Morgantown"],
    "WI": ["Milwaukee", "Madison", "Green Bay", "Kenosha"],
    "WY": ["Cheyenne", "Casper", "Laramie", "Gillette"],
}

DEFAULT_CITIES: List[str] = ["Downtown", "Metro Area", "City Center"]
AUCTION_TYPES: List[str] = ["foreclosure", "bankruptcy", "tax"]
TIME_SLOTS: List[str] = ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"]

MAX_EVENTS_PER_STATE = 3
DAY_SPREAD = 3

# Offsets keep each attribute's draws apart from the others.
DAY_OFFSET = 1000
CITY_OFFSET = 2000
TYPE_OFFSET = 3000
TIME_OFFSET = 4000
COUNT_OFFSET = 5000


def month_seed(year: int, month: int) -> int:
    """Seed shared by every event of a calendar month."""
    return year * 100 + month


def _pick(options: List[str], seed: int, index: int) -> str:
    return options[int(seeded_random(seed, index) * len(options))]


def generate_auction_events(
    state: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> List[AuctionEvent]:
    """
    Build the auction calendar for one month.

    Args:
        state: Optional state code; filters the finished calendar
        year: Calendar year (defaults to the current year)
        month: Calendar month 1-12 (defaults to the current month)
        today: Reference day for dropping past events (defaults to date.today())

    Returns:
        Events sorted by date. Events dated before ``today`` are omitted.

    Raises:
        ValueError: If month is outside 1-12 or year outside 1-9999
    """
    today = today or date.today()
    year = today.year if year is None else year
    month = today.month if month is None else month

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise ValueError(f"year must be between 1 and 9999, got {year}")

    seed = month_seed(year, month)
    days_in_month = calendar.monthrange(year, month)[1]
    events: List[AuctionEvent] = []

    for state_index, state_code in enumerate(STATES):
        event_count = min(int(seeded_random(seed, state_index) * 3) + 1, MAX_EVENTS_PER_STATE)
        cities = STATE_CITIES.get(state_code, DEFAULT_CITIES)

        for i in range(event_count):
            event_index = state_index * 10 + i
            event_day = int(seeded_random(seed, event_index + DAY_OFFSET) * days_in_month) + 1
            if i > 0:
                event_day = min(event_day + i * DAY_SPREAD, days_in_month)

            event_date = date(year, month, event_day)
            if event_date < today:
                continue

            events.append(
                AuctionEvent(
                    id=event_index,
                    date=event_date.isoformat(),
                    state=state_code,
                    city=_pick(cities, seed, event_index + CITY_OFFSET),
                    auction_type=_pick(AUCTION_TYPES, seed, event_index + TYPE_OFFSET),
                    time=_pick(TIME_SLOTS, seed, event_index + TIME_OFFSET),
                    properties_count=int(seeded_random(seed, event_index + COUNT_OFFSET) * 15) + 5,
                )
            )

    # ISO strings sort chronologically; sorted() is stable for same-day events.
    events = sorted(events, key=lambda event: event.date)

    if state:
        state = state.upper()
        return [event for event in events if event.state == state]
    return events
