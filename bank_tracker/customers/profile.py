"""Mini README: Customer profile record shown next to the ledger.

Structure:
    * CustomerProfile - opaque display data passed through storage untouched.

The profile is sourced from an external directory and never influences the
ledger balance. ``from_api_user`` maps one entry of the lookup service's
``results`` array into the record stored with the snapshot.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping


@dataclass(frozen=True, slots=True)
class CustomerProfile:
    """Display details for the customer owning the ledger."""

    name: str
    email: str
    photo: str
    phone: str
    location: str

    @classmethod
    def from_api_user(cls, user: Mapping[str, Any]) -> "CustomerProfile":
        """Map a lookup-service user document, raising ``KeyError``/``TypeError`` on bad shapes."""

        name = user["name"]
        picture = user["picture"]
        location = user["location"]
        photo = picture.get("large") or picture.get("medium")
        if not photo:
            raise KeyError("picture")
        return cls(
            name=f"{name['first']} {name['last']}",
            email=str(user["email"]),
            photo=str(photo),
            phone=str(user["phone"]),
            location=f"{location['city']}, {location['country']}",
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CustomerProfile":
        """Rebuild a stored profile; missing fields default to empty strings."""

        return cls(**{item.name: str(payload.get(item.name) or "") for item in fields(cls)})

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)
