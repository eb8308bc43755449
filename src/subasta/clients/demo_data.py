"""
Synthetic ATTOM data

Curated demo listings and synthetic foreclosure fields used when the ATTOM
foreclosure endpoint is not available to the current subscription. These
values use ordinary (unseeded) randomness on purpose: they simulate live
variability and are never shown as a stable calendar.
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

DEMO_STATUS_MSG = "Demo Data - ATTOM Integration Pending"
ENHANCED_STATUS_MSG = "ATTOM Data + Foreclosure Enhancement"
DEMO_TOTAL = 150
TRUSTEE_PHONE = "1-800-AUCTION"
DEFAULT_ENHANCE_VALUE = 300000

STATE_PROPERTIES: Dict[str, List[Dict[str, Any]]] = {
    "FL": [
        {"address": "1245 Ocean Drive", "city": "Miami Beach", "county": "Miami-Dade", "beds": 3, "baths": 2, "sqft": 1800, "market_value": 450000},
        {"address": "3467 Collins Ave", "city": "Miami", "county": "Miami-Dade", "beds": 2, "baths": 2, "sqft": 1200, "market_value": 320000},
        {"address": "789 Bayfront Blvd", "city": "Tampa", "county": "Hillsborough", "beds": 4, "baths": 3, "sqft": 2400, "market_value": 380000},
        {"address": "456 Palm Beach Rd", "city": "West Palm Beach", "county": "Palm Beach", "beds": 3, "baths": 2, "sqft": 1900, "market_value": 395000},
        {"address": "2345 Atlantic Ave", "city": "Fort Lauderdale", "county": "Broward", "beds": 3, "baths": 2, "sqft": 1650, "market_value": 385000},
    ],
    "CA": [
        {"address": "123 Hollywood Blvd", "city": "Los Angeles", "county": "Los Angeles", "beds": 3, "baths": 2, "sqft": 1600, "market_value": 750000},
        {"address": "789 Market St", "city": "San Francisco", "county": "San Francisco", "beds": 2, "baths": 1, "sqft": 900, "market_value": 850000},
        {"address": "456 Sunset Strip", "city": "West Hollywood", "county": "Los Angeles", "beds": 4, "baths": 3, "sqft": 2200, "market_value": 920000},
        {"address": "321 Beach Ave", "city": "San Diego", "county": "San Diego", "beds": 3, "baths": 2, "sqft": 1800, "market_value": 680000},
    ],
    "TX": [
        {"address": "1000 Main St", "city": "Houston", "county": "Harris", "beds": 4, "baths": 3, "sqft": 2800, "market_value": 380000},
        {"address": "500 Commerce St", "city": "Dallas", "county": "Dallas", "beds": 3, "baths": 2, "sqft": 2100, "market_value": 420000},
        {"address": "750 River Walk", "city": "San Antonio", "county": "Bexar", "beds": 3, "baths": 2, "sqft": 1900, "market_value": 295000},
        {"address": "200 Congress Ave", "city": "Austin", "county": "Travis", "beds": 3, "baths": 2, "sqft": 1750, "market_value": 465000},
    ],
    "NY": [
        {"address": "100 Broadway", "city": "New York", "county": "New York", "beds": 2, "baths": 1, "sqft": 800, "market_value": 650000},
        {"address": "250 Park Ave", "city": "New York", "county": "New York", "beds": 1, "baths": 1, "sqft": 600, "market_value": 495000},
        {"address": "75 Wall St", "city": "New York", "county": "New York", "beds": 2, "baths": 2, "sqft": 1100, "market_value": 720000},
        {"address": "500 5th Ave", "city": "New York", "county": "New York", "beds": 3, "baths": 2, "sqft": 1400, "market_value": 890000},
    ],
}


def generic_properties(city: Optional[str] = None) -> List[Dict[str, Any]]:
    """Templated listings for states without a curated list."""
    return [
        {"address": "123 Main St", "city": city or "Downtown", "county": "County Central", "beds": 3, "baths": 2, "sqft": 1800, "market_value": 350000},
        {"address": "456 Oak Ave", "city": city or "Riverside", "county": "County North", "beds": 4, "baths": 3, "sqft": 2200, "market_value": 420000},
        {"address": "789 Pine St", "city": city or "Hillside", "county": "County South", "beds": 2, "baths": 2, "sqft": 1200, "market_value": 285000},
    ]


def synthetic_foreclosure(market_value: float, window_days: int = 90) -> Dict[str, Any]:
    """
    Foreclosure block for records that lack one.

    Amount is 60-80% of market value; the date falls within ``window_days``.
    """
    offset = timedelta(seconds=random.random() * window_days * 86400)
    return {
        "amount": round(market_value * (0.6 + random.random() * 0.2)),
        "date": (datetime.now(timezone.utc) + offset).isoformat(),
        "type": "foreclosure",
        "trusteePhone": TRUSTEE_PHONE,
    }


def enhance_with_foreclosure(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Add synthetic foreclosure data to a basic property-search response."""
    enhanced = []
    for prop in payload.get("property") or []:
        market = ((prop.get("assessment") or {}).get("market") or {}).get("mktTtlValue")
        enhanced.append({**prop, "foreclosure": synthetic_foreclosure(market or DEFAULT_ENHANCE_VALUE)})

    return {
        **payload,
        "property": enhanced,
        "status": {**(payload.get("status") or {}), "msg": ENHANCED_STATUS_MSG},
    }


def build_demo_response(
    state: Optional[str] = None,
    city: Optional[str] = None,
    page: int = 1,
    page_size: int = 25,
) -> Dict[str, Any]:
    """
    Build one page of demo foreclosure data in the ATTOM response shape.

    The curated list for the state (or the generic list) is narrowed by city,
    padded with numbered clones up to ``page_size`` and sliced by page, so
    page 1 always holds exactly ``page_size`` records.
    """
    base = [dict(p) for p in STATE_PROPERTIES.get((state or "").upper(), generic_properties(city))]

    if city:
        matching = [p for p in base if city.lower() in p["city"].lower()]
        # A city outside the curated list keeps the state's listings, relabelled.
        base = matching or [{**p, "city": city} for p in base]

    templates = list(base)
    while len(base) < page_size:
        template = templates[len(base) % len(templates)]
        base.append({**template, "address": f"{1000 + len(base)} Demo St", "city": city or template["city"]})

    start = (page - 1) * page_size
    records = []
    for index, prop in enumerate(base[start:start + page_size]):
        records.append({
            "identifier": {"Id": index + start, "fips": "12345", "apn": f"APN{index}"},
            "address": {
                "country": "US",
                "countryName": "United States",
                "state": state,
                "locality": prop["city"],
                "oneLine": prop["address"],
                "postal1": str(10000 + int(random.random() * 90000)),
            },
            "building": {
                "size": {"bldgSize": prop["sqft"], "livingSize": prop["sqft"]},
                "rooms": {"beds": prop["beds"], "baths": prop["baths"], "bathsPartial": 0},
                "construction": {"yearBuilt": 1980 + int(random.random() * 40)},
            },
            "lot": {
                "lotSize1": round(5000 + random.random() * 10000),
                "poolType": "Pool" if random.random() > 0.7 else "None",
            },
            "assessment": {"market": {"mktTtlValue": prop["market_value"]}},
            "avm": {"amount": {"value": prop["market_value"]}},
            "foreclosure": synthetic_foreclosure(prop["market_value"], window_days=120),
        })

    return {
        "status": {
            "version": "1.0.0",
            "code": 200,
            "msg": DEMO_STATUS_MSG,
            "total": DEMO_TOTAL,
            "page": page,
            "pagesize": page_size,
        },
        "property": records,
    }
