"""Seed trips served when the app runs in demo mode."""
import copy

from ecowise.services.costs import remaining_budget, transport_cost
from ecowise.services.emissions import compute_emissions

_DEMO_TRIPS = [
    {
        "id": "demo-1",
        "from": "Bengaluru",
        "to": "Mysuru",
        "startDate": "2026-02-14",
        "deadline": "2026-02-16",
        "budget": 16000,
        "userID": "demo-user",
        "plan_name": "Heritage Rail Escape",
        "plan_rationale": "Prioritizes regional rail and walkable heritage loops to cut transport emissions.",
        "itinerary": [
            {
                "day": 1,
                "date": "2026-02-14T00:00:00.000Z",
                "theme": "Rail arrival + palace quarter",
                "activities": ["Depart early by regional rail", "Walk the palace district", "Local vegetarian thali"],
                "accommodation": {
                    "name": "Nisarga Green Stay",
                    "location": "Mysuru",
                    "estimated_cost_inr": 2400,
                    "booking_link": "https://example.com/eco-stay",
                },
            },
            {
                "day": 2,
                "date": "2026-02-15T00:00:00.000Z",
                "theme": "Cycling loop + artisan markets",
                "activities": ["E-bike rental", "Handloom co-op visit", "Lake sunset walk"],
            },
            {
                "day": 3,
                "date": "2026-02-16T00:00:00.000Z",
                "theme": "Botanical gardens + return",
                "activities": ["Morning gardens", "Rail return", "Carbon offset suggestion"],
            },
        ],
        "plan": [
            {
                "mode": "Rail", "source": "Bengaluru", "destination": "Mysuru", "serviceNumber": "R12",
                "departureTime": "2026-02-14T06:10:00", "arrivalTime": "2026-02-14T08:15:00",
                "cost": 320, "durationHrs": 2.1, "bufferMins": 20, "availability": "Good", "distanceKm": 140,
            },
            {
                "mode": "E-bike", "source": "City loop", "destination": "City loop",
                "departureTime": "2026-02-15T09:00:00", "arrivalTime": "2026-02-15T12:00:00",
                "cost": 500, "durationHrs": 3, "availability": "Reserved",
                "warnings": ["Carry refillable water."], "distanceKm": 18,
            },
            {
                "mode": "Rail", "source": "Mysuru", "destination": "Bengaluru", "serviceNumber": "R13",
                "departureTime": "2026-02-16T17:30:00", "arrivalTime": "2026-02-16T19:40:00",
                "cost": 320, "durationHrs": 2.2, "bufferMins": 15, "availability": "Good", "distanceKm": 140,
            },
        ],
        "total_cost_accommodation_activities": 5400,
        "travelSelection": {"outboundId": "R12", "returnId": "R13", "outboundCost": 320, "returnCost": 320},
        "sideLocations": [{"name": "Srirangapatna", "days": 1, "budget": 2500}],
        "warnings": ["Low evening transit frequency after 9 PM."],
    },
    {
        "id": "demo-2",
        "from": "Delhi",
        "to": "Jaipur",
        "startDate": "2026-03-02",
        "deadline": "2026-03-05",
        "budget": 24000,
        "userID": "demo-user",
        "plan_name": "Pink City Slow Travel",
        "plan_rationale": "Combines rail + shared EV rides with low-impact cultural activities.",
        "itinerary": [
            {
                "day": 1,
                "date": "2026-03-02T00:00:00.000Z",
                "theme": "Express rail + old city walk",
                "activities": ["Rail arrival", "Heritage walk", "Street food tour"],
                "accommodation": {
                    "name": "Hawa Eco Courtyard",
                    "location": "Jaipur",
                    "estimated_cost_inr": 3200,
                    "booking_link": "https://example.com/eco-courtyard",
                },
            },
            {
                "day": 2,
                "date": "2026-03-03T00:00:00.000Z",
                "theme": "Fort shuttle + sunset hike",
                "activities": ["Shared EV ride", "Amber Fort visit", "Sunset ridge hike"],
            },
            {
                "day": 3,
                "date": "2026-03-04T00:00:00.000Z",
                "theme": "Artisan studio + market",
                "activities": ["Block print studio", "Local market", "Eco cafe"],
            },
            {
                "day": 4,
                "date": "2026-03-05T00:00:00.000Z",
                "theme": "Museum morning + return",
                "activities": ["City museum", "Rail return"],
            },
        ],
        "plan": [
            {
                "mode": "Rail", "source": "Delhi", "destination": "Jaipur", "serviceNumber": "JP Express",
                "departureTime": "2026-03-02T07:20:00", "arrivalTime": "2026-03-02T11:50:00",
                "cost": 850, "durationHrs": 4.5, "bufferMins": 25, "availability": "Limited", "distanceKm": 280,
            },
            {
                "mode": "Shared EV", "source": "Jaipur", "destination": "Amber Fort",
                "departureTime": "2026-03-03T08:40:00", "arrivalTime": "2026-03-03T09:20:00",
                "cost": 520, "durationHrs": 0.7, "bufferMins": 15, "availability": "Moderate", "distanceKm": 19,
            },
            {
                "mode": "Rail", "source": "Jaipur", "destination": "Delhi", "serviceNumber": "JP Express",
                "departureTime": "2026-03-05T16:10:00", "arrivalTime": "2026-03-05T20:40:00",
                "cost": 850, "durationHrs": 4.6, "bufferMins": 25, "availability": "Limited", "distanceKm": 280,
            },
        ],
        "total_cost_accommodation_activities": 11600,
        "travelSelection": {
            "outboundId": "JP Express", "returnId": "JP Express", "outboundCost": 850, "returnCost": 850,
        },
        "sideLocations": [{"name": "Amber Fort", "days": 1, "budget": 3000}],
        "warnings": ["Book Fort shuttle in advance on weekends."],
    },
    {
        "id": "demo-3",
        "from": "Mumbai",
        "to": "Goa",
        "startDate": "2026-04-10",
        "deadline": "2026-04-14",
        "budget": 32000,
        "userID": "demo-user",
        "plan_name": "Coastal Rail + Community Stays",
        "plan_rationale": "Replaces short-haul flights with overnight rail and locally owned stays.",
        "itinerary": [
            {
                "day": 1,
                "date": "2026-04-10T00:00:00.000Z",
                "theme": "Overnight rail arrival",
                "activities": ["Sleep-friendly train", "Check-in", "Beach cleanup"],
                "accommodation": {
                    "name": "Casa Verde Collective",
                    "location": "North Goa",
                    "estimated_cost_inr": 3600,
                    "booking_link": "https://example.com/casa-verde",
                },
            },
            {
                "day": 2,
                "date": "2026-04-11T00:00:00.000Z",
                "theme": "Mangrove kayak + market",
                "activities": ["Mangrove kayak", "Farmers market", "Local seafood"],
            },
            {
                "day": 3,
                "date": "2026-04-12T00:00:00.000Z",
                "theme": "Cycle trail + village tour",
                "activities": ["Cycle trail", "Village walk", "Sunset cliffs"],
            },
            {
                "day": 4,
                "date": "2026-04-13T00:00:00.000Z",
                "theme": "Community kitchen + beach",
                "activities": ["Community kitchen", "Beach day", "Return rail prep"],
            },
            {
                "day": 5,
                "date": "2026-04-14T00:00:00.000Z",
                "theme": "Return by rail",
                "activities": ["Morning yoga", "Return overnight train"],
            },
        ],
        "plan": [
            {
                "mode": "Rail", "source": "Mumbai", "destination": "Goa",
                "departureTime": "2026-04-10T21:15:00", "arrivalTime": "2026-04-11T08:20:00",
                "cost": 1400, "durationHrs": 11.5, "availability": "Limited", "distanceKm": 590,
            },
            {
                "mode": "Cycle", "source": "Local trails", "destination": "Local trails",
                "departureTime": "2026-04-11T09:00:00", "arrivalTime": "2026-04-11T12:30:00",
                "cost": 400, "durationHrs": 3.5, "availability": "Reserved", "distanceKm": 22,
            },
            {
                "mode": "Rail", "source": "Goa", "destination": "Mumbai",
                "departureTime": "2026-04-14T18:10:00", "arrivalTime": "2026-04-15T06:00:00",
                "cost": 1400, "durationHrs": 11.8, "bufferMins": 15, "availability": "Limited", "distanceKm": 590,
            },
        ],
        "total_cost_accommodation_activities": 16200,
        "travelSelection": {"outboundId": "KK Express", "returnId": "KK Express", "outboundCost": 1400, "returnCost": 1400},
        "sideLocations": [],
        "warnings": ["Overnight rail has limited berths. Reserve early."],
    },
]


def seed_demo_trips() -> list[dict]:
    """Fresh copies of the demo trips with costs and emissions filled in."""
    trips = copy.deepcopy(_DEMO_TRIPS)
    for trip in trips:
        selection = trip["travelSelection"]
        trip["totalCost"] = transport_cost(selection["outboundCost"], selection["returnCost"], trip["plan"])
        trip["budgetRemaining"] = remaining_budget(
            trip["budget"], trip["totalCost"], trip["total_cost_accommodation_activities"]
        )
        trip["emissions"] = compute_emissions(trip["plan"], trip["itinerary"]).to_dict()
        trip["source"] = "demo"
        trip["createdAt"] = None
    return trips
