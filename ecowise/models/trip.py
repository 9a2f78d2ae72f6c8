import uuid

from sqlalchemy import Column, String, DateTime, Float, JSON, Text
from sqlalchemy.sql import func
from ecowise.database import Base
from ecowise.utils.dates import to_iso_timestamp


def _new_id() -> str:
    return uuid.uuid4().hex


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(32), primary_key=True, default=_new_id)

    origin = Column("from", String(128), nullable=False)
    destination = Column("to", String(128), nullable=False)

    # Kept exactly as the client sent them
    start_date = Column(String(64), nullable=False)
    deadline = Column(String(64), nullable=False)

    budget = Column(Float, nullable=False)
    user_id = Column(String(128), nullable=False, index=True)

    plan_name = Column(String(256), nullable=True)
    plan_rationale = Column(Text, nullable=True)

    itinerary = Column(JSON, default=list)
    plan = Column(JSON, default=list)

    total_cost_accommodation_activities = Column(Float, default=0.0)
    total_cost = Column(Float, nullable=False, default=0.0)
    budget_remaining = Column(Float, nullable=True)

    travel_selection = Column(JSON, default=dict)
    side_locations = Column(JSON, default=list)
    warnings = Column(JSON, default=list)
    emissions = Column(JSON, default=dict)

    # llm, fallback or demo
    source = Column(String(16), default="llm")

    created_at = Column(DateTime, server_default=func.now())

    @classmethod
    def from_document(cls, doc: dict) -> "Trip":
        return cls(
            origin=doc["from"],
            destination=doc["to"],
            start_date=doc["startDate"],
            deadline=doc["deadline"],
            budget=doc["budget"],
            user_id=doc["userID"],
            plan_name=doc.get("plan_name"),
            plan_rationale=doc.get("plan_rationale"),
            itinerary=doc.get("itinerary") or [],
            plan=doc.get("plan") or [],
            total_cost_accommodation_activities=doc.get("total_cost_accommodation_activities") or 0,
            total_cost=doc["totalCost"],
            budget_remaining=doc.get("budgetRemaining"),
            travel_selection=doc.get("travelSelection") or {},
            side_locations=doc.get("sideLocations") or [],
            warnings=doc.get("warnings") or [],
            emissions=doc.get("emissions") or {},
            source=doc.get("source", "llm"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from": self.origin,
            "to": self.destination,
            "startDate": self.start_date,
            "deadline": self.deadline,
            "budget": self.budget,
            "userID": self.user_id,
            "plan_name": self.plan_name,
            "plan_rationale": self.plan_rationale,
            "itinerary": self.itinerary or [],
            "plan": self.plan or [],
            "total_cost_accommodation_activities": self.total_cost_accommodation_activities,
            "totalCost": self.total_cost,
            "budgetRemaining": self.budget_remaining,
            "travelSelection": self.travel_selection or {},
            "sideLocations": self.side_locations or [],
            "warnings": self.warnings or [],
            "emissions": self.emissions or {},
            "source": self.source,
            "createdAt": to_iso_timestamp(self.created_at) if self.created_at else None,
        }
