"""Mini README: Customer profile lookup for the tracker.

Exposes the profile record, the HTTP lookup client, and the refresher that
applies only the most recently started lookup to a ledger.
"""

from .lookup import CustomerLookup, CustomerRefresher, RefreshOutcome
from .profile import CustomerProfile

__all__ = ["CustomerLookup", "CustomerProfile", "CustomerRefresher", "RefreshOutcome"]
