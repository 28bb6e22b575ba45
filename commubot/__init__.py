"""
CommuBot: match free-text volunteering requests to a catalog of opportunities.
"""

from commubot.extract import extract
from commubot.match import match
from commubot.model import Opportunity, VolunteerIntent

__all__ = ["extract", "match", "Opportunity", "VolunteerIntent"]
