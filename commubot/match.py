"""
Opportunity matching.

Given a VolunteerIntent and the catalog, keep every opportunity that passes
three checks, in catalog order (no scoring, first match wins):

    activity AND capacity AND timing

If nothing passes, fall back to capacity alone.

Known quirks kept on purpose:
- the words "general" / "volunteering" pass every activity check, so the
  default category "general volunteering" matches the whole catalog
- the evening check looks for evening/6pm/7pm/8pm but not 9pm, although
  "9pm" makes the extractor pick the evening bucket
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from commubot.config import MAX_FALLBACK_MATCHES, MAX_MATCHES
from commubot.model import FLEXIBLE, WEEKDAYS, Opportunity, VolunteerIntent

logger = logging.getLogger(__name__)

ALWAYS_MATCHING_KEYWORDS = ("general", "volunteering")


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def activity_matches(activity_category: str, opportunity: Opportunity) -> bool:
    """
    True if any keyword of the category appears in title + category text.
    """
    keywords = activity_category.lower().split()
    hay = f"{opportunity.title} {opportunity.activity_category}".lower()
    return any(k in hay or k in ALWAYS_MATCHING_KEYWORDS for k in keywords)


def capacity_matches(group_size: int, opportunity: Opportunity) -> bool:
    # The whole group must fit
    return group_size <= opportunity.max_participants


def timing_matches(timing: str, opportunity: Opportunity) -> bool:
    """
    Flexible always matches. Otherwise a shared weekday name or a
    bucket-level correspondence with the time slot text is required.
    """
    if timing == FLEXIBLE:
        return True

    wanted = timing.lower()
    slot = opportunity.time_slot.lower()

    if any(d in wanted and d in slot for d in WEEKDAYS):
        return True

    on_weekend = "saturday" in slot or "sunday" in slot

    if "weekend" in wanted and on_weekend:
        return True
    if "weekday" in wanted and not on_weekend:
        return True
    if "morning" in wanted and ("am" in slot or "morning" in slot):
        return True
    if "afternoon" in wanted and ("pm" in slot or "afternoon" in slot):
        return True
    if "evening" in wanted and any(x in slot for x in ("evening", "6pm", "7pm", "8pm")):
        return True

    return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def match(intent: VolunteerIntent, catalog: Sequence[Opportunity]) -> List[Opportunity]:
    """
    Return up to 5 matching opportunities in catalog order.

    Falls back to up to 3 opportunities that only fit the group size.
    Empty only if no opportunity has enough capacity.
    """
    matches: List[Opportunity] = []
    for opp in catalog:
        if (
            activity_matches(intent.activity_category, opp)
            and capacity_matches(intent.group_size, opp)
            and timing_matches(intent.timing, opp)
        ):
            logger.debug("Match found: %s (%d capacity)", opp.title, opp.max_participants)
            matches.append(opp)

    logger.info(
        "Found %d matches for size=%d activity=%r timing=%r",
        len(matches),
        intent.group_size,
        intent.activity_category,
        intent.timing,
    )

    if matches:
        return matches[:MAX_MATCHES]

    logger.info("No specific matches, falling back to capacity only")
    fallback = [opp for opp in catalog if capacity_matches(intent.group_size, opp)]
    return fallback[:MAX_FALLBACK_MATCHES]
