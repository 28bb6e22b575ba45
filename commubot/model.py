"""
Central data model definitions used across the project.

This module defines the canonical structure of VolunteerIntent, Opportunity
and Booking objects so that:
- the extractor, the matcher and the CLI share the same field names
- catalog records (JSON) map onto one well-defined Python type
- every object is immutable once it has been built
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

GENERAL_CATEGORY = "general volunteering"

ACTIVITY_CATEGORIES = (
    "environmental cleanup",
    "food bank",
    "animal shelter",
    "community garden",
    "tutoring",
    "senior care",
    "disability support",
    "youth programs",
    GENERAL_CATEGORY,
)

FLEXIBLE = "flexible"

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VolunteerIntent:
    """
    Structured form of one free-text volunteering request.

    raw_text is kept for diagnostics only and is never parsed again.
    """

    group_size: int = 1
    activity_category: str = GENERAL_CATEGORY
    timing: str = FLEXIBLE
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Opportunity:
    """
    Represents one volunteering opportunity as stored in catalog.json.
    """

    id: int
    title: str
    organization_name: str
    activity_category: str
    location: str
    available_date: str
    time_slot: str
    max_participants: int
    contact_email: str
    description: str

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Opportunity":
        """
        Build an Opportunity from a catalog record.

        Accepts both the field names of this class and the catalog's
        JSON keys (ngo_name, activity_type, date_available).
        Raises KeyError for missing fields, ValueError for bad numbers.
        """

        def pick(*keys: str) -> Any:
            for k in keys:
                if k in record:
                    return record[k]
            raise KeyError(keys[0])

        return cls(
            id=int(pick("id")),
            title=str(pick("title")).strip(),
            organization_name=str(pick("organization_name", "ngo_name")).strip(),
            activity_category=str(pick("activity_category", "activity_type")).strip().lower(),
            location=str(pick("location")).strip(),
            available_date=str(pick("available_date", "date_available")).strip(),
            time_slot=str(pick("time_slot")).strip(),
            max_participants=int(pick("max_participants")),
            contact_email=str(pick("contact_email")).strip(),
            description=str(record.get("description", "") or "").strip(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Return the catalog JSON form of this opportunity.
        """
        return {
            "id": self.id,
            "title": self.title,
            "ngo_name": self.organization_name,
            "activity_type": self.activity_category,
            "location": self.location,
            "date_available": self.available_date,
            "time_slot": self.time_slot,
            "max_participants": self.max_participants,
            "contact_email": self.contact_email,
            "description": self.description,
        }


@dataclass(frozen=True)
class Booking:
    """
    One booked opportunity, as stored in bookings.json.
    """

    booking_id: int
    user_id: str
    opportunity_id: int
    group_size: int
    activity_category: str
    timing: str
    status: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
