"""Where trips live: the database, or the in-process demo set.

A ``TripSource`` is picked once per request by ``get_trip_source``; routes
never fall back from one to the other on their own.
"""
import re
import uuid
import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecowise.config import get_settings
from ecowise.database import get_db
from ecowise.errors import PersistenceError
from ecowise.models.trip import Trip
from ecowise.services.demo_trips import seed_demo_trips
from ecowise.services.prompt_extractor import TripIntent
from ecowise.utils.dates import to_iso_timestamp, utc_now

logger = logging.getLogger(__name__)

PROMPT_MATCH_LIMIT = 10


class TripSource(ABC):
    name: str = "base"

    @abstractmethod
    def insert_many(self, docs: list[dict]) -> list[dict]:
        """Store every document or none of them; return the stored records."""

    @abstractmethod
    def list_trips(self) -> list[dict]:
        pass

    @abstractmethod
    def get_trip(self, trip_id: str) -> Optional[dict]:
        pass

    @abstractmethod
    def delete_trip(self, trip_id: str) -> bool:
        """Remove a trip. False when there was nothing to remove."""

    @abstractmethod
    def trips_for_prompt(self, prompt: str, intent: TripIntent) -> list[dict]:
        pass


class LiveTripSource(TripSource):
    name = "live"

    def __init__(self, db: Session):
        self.db = db

    def insert_many(self, docs: list[dict]) -> list[dict]:
        rows = [Trip.from_document(doc) for doc in docs]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert {len(rows)} trip(s): {e}")
            raise PersistenceError(message=str(e.__class__.__name__)) from e

        for row in rows:
            self.db.refresh(row)
        logger.info(f"Stored {len(rows)} trip(s)")
        return [row.to_dict() for row in rows]

    def list_trips(self) -> list[dict]:
        trips = self.db.query(Trip).order_by(Trip.created_at.desc()).all()
        return [t.to_dict() for t in trips]

    def get_trip(self, trip_id: str) -> Optional[dict]:
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        return trip.to_dict() if trip else None

    def delete_trip(self, trip_id: str) -> bool:
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        if not trip:
            return False
        self.db.delete(trip)
        self.db.commit()
        return True

    def trips_for_prompt(self, prompt: str, intent: TripIntent) -> list[dict]:
        if not intent.origin and not intent.destination:
            return []

        query = self.db.query(Trip)
        if intent.origin:
            query = query.filter(func.lower(Trip.origin) == intent.origin)
        if intent.destination:
            query = query.filter(func.lower(Trip.destination) == intent.destination)

        trips = query.order_by(Trip.created_at.desc()).limit(PROMPT_MATCH_LIMIT).all()
        return [t.to_dict() for t in trips]


# (prompt pattern, destination) pairs for picking demo trips
DEMO_PROMPT_RULES = [
    (re.compile(r"jaipur", re.IGNORECASE), "jaipur"),
    (re.compile(r"mumbai|goa", re.IGNORECASE), "goa"),
]
DEMO_DEFAULT_COUNT = 2


class DemoTripSource(TripSource):
    name = "demo"

    _trips: Optional[list[dict]] = None

    @classmethod
    def reset(cls):
        cls._trips = None

    @classmethod
    def _store(cls) -> list[dict]:
        if cls._trips is None:
            cls._trips = seed_demo_trips()
        return cls._trips

    def insert_many(self, docs: list[dict]) -> list[dict]:
        created_at = to_iso_timestamp(utc_now())
        stored = [{**doc, "id": uuid.uuid4().hex, "createdAt": created_at} for doc in docs]
        self._store().extend(stored)
        return stored

    def list_trips(self) -> list[dict]:
        return list(self._store())

    def get_trip(self, trip_id: str) -> Optional[dict]:
        return next((t for t in self._store() if t["id"] == trip_id), None)

    def delete_trip(self, trip_id: str) -> bool:
        trips = self._store()
        for i, trip in enumerate(trips):
            if trip["id"] == trip_id:
                del trips[i]
                return True
        return False

    def trips_for_prompt(self, prompt: str, intent: TripIntent) -> list[dict]:
        trips = self._store()
        for pattern, destination in DEMO_PROMPT_RULES:
            if pattern.search(prompt or ""):
                return [t for t in trips if str(t.get("to", "")).lower() == destination][:1]
        return trips[:DEMO_DEFAULT_COUNT]


def get_trip_source(db: Session = Depends(get_db)) -> TripSource:
    if get_settings().demo_mode:
        return DemoTripSource()
    return LiveTripSource(db)
