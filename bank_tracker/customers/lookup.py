"""Mini README: Fetch a random customer profile over HTTP.

Structure:
    * CustomerLookup - async ``httpx`` client for the profile endpoint.
    * RefreshOutcome - what happened to one refresh attempt.
    * CustomerRefresher - numbers each refresh and only lets the most
      recently started one replace the ledger's customer.

Every failure of the lookup (transport errors, non-2xx statuses, bodies that
are not JSON or lack ``results[0]``) surfaces as ``ProfileFetchError``. The
refresher turns that into a logged warning and leaves the previous profile
in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import httpx

from ..errors import ProfileFetchError
from ..logging_utils import get_logger
from .profile import CustomerProfile

if TYPE_CHECKING:
    from ..ledger.ledger import Ledger

LOGGER = get_logger(__name__)

DEFAULT_LOOKUP_URL = "https://randomuser.me/api/"


class CustomerLookup:
    """Async client returning one ``CustomerProfile`` per call.

    Example:
        >>> async with CustomerLookup() as lookup:
        ...     profile = await lookup.fetch()
    """

    def __init__(
        self,
        url: str = DEFAULT_LOOKUP_URL,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CustomerLookup":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch(self) -> CustomerProfile:
        client = await self._ensure_client()
        try:
            response = await client.get(self.url)
        except httpx.HTTPError as error:
            raise ProfileFetchError(f"Customer lookup failed: {error}") from error

        if not response.is_success:
            raise ProfileFetchError(
                f"Customer lookup returned HTTP {response.status_code}", response.status_code
            )
        try:
            payload = response.json()
        except ValueError as error:
            raise ProfileFetchError("Customer lookup returned invalid JSON") from error

        try:
            user = payload["results"][0]
            profile = CustomerProfile.from_api_user(user)
        except (KeyError, IndexError, TypeError, AttributeError) as error:
            raise ProfileFetchError(f"Customer lookup returned an unexpected document: {error!r}") from error
        LOGGER.debug("Fetched customer profile for %s", profile.name)
        return profile


@dataclass(slots=True)
class RefreshOutcome:
    """Result of a single ``CustomerRefresher.refresh`` call."""

    token: int
    applied: bool
    profile: Optional[CustomerProfile] = None
    error: Optional[ProfileFetchError] = None
    # A newer refresh started before this one finished.
    stale: bool = False


class CustomerRefresher:
    """Apply customer lookups to a ledger, newest request wins."""

    def __init__(self, ledger: "Ledger", lookup: CustomerLookup) -> None:
        self.ledger = ledger
        self.lookup = lookup
        self._latest_token = 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def refresh(self) -> RefreshOutcome:
        self._latest_token += 1
        token = self._latest_token
        try:
            profile = await self.lookup.fetch()
        except ProfileFetchError as error:
            if token != self._latest_token:
                LOGGER.info("Ignoring failure of superseded customer refresh #%s: %s", token, error)
                return RefreshOutcome(token=token, applied=False, error=error, stale=True)
            LOGGER.warning("Customer refresh #%s failed: %s", token, error)
            return RefreshOutcome(token=token, applied=False, error=error)

        if token != self._latest_token:
            LOGGER.info(
                "Discarding customer refresh #%s; #%s started since", token, self._latest_token
            )
            return RefreshOutcome(token=token, applied=False, profile=profile, stale=True)

        self.ledger.set_customer(profile)
        return RefreshOutcome(token=token, applied=True, profile=profile)
