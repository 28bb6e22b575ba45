"""
Intent extraction (free text -> VolunteerIntent).

Turns a request such as

    "5 people, environmental cleanup, next Friday"

into group size, activity category and timing token.

Important rules (DO NOT CHANGE):
- Matching is case-insensitive and uses plain substring containment
  (a trigger may hit inside a larger word, e.g. "eco" in "second")
- Tables are walked in declaration order, first hit wins
- extract() never raises; every field falls back to a default
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from commubot.model import FLEXIBLE, GENERAL_CATEGORY, WEEKDAYS, VolunteerIntent


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

# Group size patterns, in priority order. Only the first pattern that
# matches is used, later ones are not checked.
GROUP_SIZE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"(\d+)\s*(?:people?|person|volunteers?)", re.IGNORECASE),
    re.compile(r"(?:group\s+of|team\s+of|we\s+are)\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s*(?:members?|folks|individuals?)", re.IGNORECASE),
    re.compile(r"(?:about|around|approximately)\s*(\d+)", re.IGNORECASE),
)

# (category, triggers) pairs. Order is priority.
ACTIVITY_TRIGGERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "environmental cleanup",
        ("environmental", "cleanup", "beach cleanup", "park cleanup", "trash",
         "litter", "conservation", "nature", "green", "eco"),
    ),
    (
        "food bank",
        ("food bank", "food sorting", "food distribution", "meal prep", "kitchen",
         "cooking", "feeding", "hunger", "food drive"),
    ),
    (
        "animal shelter",
        ("animal shelter", "animal care", "pets", "dogs", "cats", "animals",
         "veterinary", "adoption", "animal rescue"),
    ),
    (
        "community garden",
        ("community garden", "gardening", "planting", "vegetables", "farming",
         "garden", "plants", "agriculture"),
    ),
    (
        "tutoring",
        ("tutoring", "teaching", "education", "homework", "students", "school",
         "learning", "mentoring", "academic"),
    ),
    (
        "senior care",
        ("senior", "elderly", "old people", "retirement", "nursing home", "aged care"),
    ),
    (
        "disability support",
        ("disability", "disabled", "special needs", "accessibility", "inclusive"),
    ),
    (
        "youth programs",
        ("youth", "teenagers", "kids", "children", "young people", "adolescents"),
    ),
)

# (timing bucket, triggers) pairs. Order is priority.
TIMING_TRIGGERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("weekend", ("weekend", "saturday", "sunday", "sat", "sun")),
    (
        "weekday",
        ("weekday", "monday", "tuesday", "wednesday", "thursday", "friday",
         "mon", "tue", "wed", "thu", "fri"),
    ),
    ("morning", ("morning", "am", "9am", "10am", "11am", "early")),
    ("afternoon", ("afternoon", "pm", "1pm", "2pm", "3pm", "4pm", "5pm")),
    ("evening", ("evening", "6pm", "7pm", "8pm", "9pm", "late")),
    ("next week", ("next week", "following week", "upcoming week")),
    ("this week", ("this week", "current week")),
    ("tomorrow", ("tomorrow", "next day")),
    (FLEXIBLE, ("flexible", "anytime", "whenever", "open", "available")),
)

NEXT_WEEKDAY_RE = re.compile(r"next\s+(" + "|".join(WEEKDAYS) + r")", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first_table_hit(
    lower_text: str,
    table: Sequence[Tuple[str, Sequence[str]]],
    default: str,
) -> str:
    """
    Return the first label whose triggers contain a substring hit.
    """
    for label, triggers in table:
        if any(t in lower_text for t in triggers):
            return label
    return default


def extract_group_size(text: str) -> int:
    """
    Group size from the first matching pattern, 1 if none matches.
    """
    for pattern in GROUP_SIZE_PATTERNS:
        m = pattern.search(text)
        if m:
            size = int(m.group(1))
            # "0 people" is not a group
            return size if size > 0 else 1
    return 1


def extract_activity(lower_text: str) -> str:
    return _first_table_hit(lower_text, ACTIVITY_TRIGGERS, GENERAL_CATEGORY)


def extract_timing(lower_text: str) -> str:
    """
    Timing token. Later steps override earlier ones:
    bucket table -> bare weekday name -> "next <weekday>".
    """
    timing = _first_table_hit(lower_text, TIMING_TRIGGERS, FLEXIBLE)

    # Specific day beats bucket (first day in Monday..Sunday order)
    day = next((d for d in WEEKDAYS if d in lower_text), None)
    if day:
        timing = day

    # Most specific wins last
    m = NEXT_WEEKDAY_RE.search(lower_text)
    if m:
        timing = f"next {m.group(1).lower()}"

    return timing


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract(text: Optional[str]) -> VolunteerIntent:
    """
    Extract a VolunteerIntent from a free-text request.

    Empty or missing text yields the defaults
    (1 person, general volunteering, flexible).
    """
    raw = text or ""
    lower = raw.lower()

    return VolunteerIntent(
        group_size=extract_group_size(raw),
        activity_category=extract_activity(lower),
        timing=extract_timing(lower),
        raw_text=raw,
    )
