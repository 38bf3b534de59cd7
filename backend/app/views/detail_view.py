"""
CustomerBook Backend — Customer Detail View
=============================================

Read-only profile page for one customer.

State machine (keyed by customer id; every load() starts over):
    LOADING ──▶ LOADED
            ├─▶ NOT_FOUND   (404, or an id the API rejects as malformed)
            └─▶ ERRORED     (any other failure)
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from app.clients.customer_api import CustomerApiClient
from app.exceptions import ApiClientError
from app.views.formatting import (
    compute_age,
    format_long_date,
    format_short_date,
    split_interests,
)

logger = logging.getLogger(__name__)


class DetailState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    ERRORED = "errored"


@dataclass
class CustomerProfile:
    id: str
    name: str
    member_number: int
    date_of_birth: str
    age: int
    interests: List[str]
    member_since: str


class CustomerDetailView:
    def __init__(self, client: CustomerApiClient, today: Optional[date] = None):
        self.client = client
        self.today = today
        self.customer_id: Optional[str] = None
        self.state = DetailState.LOADING
        self.customer: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    async def load(self, customer_id: str) -> None:
        self.customer_id = customer_id
        self.state = DetailState.LOADING
        self.customer = None
        self.error = None

        try:
            customer = await self.client.get_customer(customer_id)
        except ApiClientError as e:
            if e.status_code == 400:
                self.state = DetailState.NOT_FOUND
                self.error = "Customer not found"
                return
            logger.warning("Customer %s failed to load: %s", customer_id, e.message)
            self.state = DetailState.ERRORED
            self.error = e.message
            return

        if customer is None:
            self.state = DetailState.NOT_FOUND
            self.error = "Customer not found"
            return

        self.customer = customer
        self.state = DetailState.LOADED

    @property
    def profile(self) -> Optional[CustomerProfile]:
        if self.customer is None:
            return None
        c = self.customer
        return CustomerProfile(
            id=str(c["id"]),
            name=c["name"],
            member_number=c["memberNumber"],
            date_of_birth=format_long_date(c["dateOfBirth"]),
            age=compute_age(c["dateOfBirth"], self.today),
            interests=split_interests(c["interests"]),
            member_since=format_short_date(c.get("createdAt") or date.today()),
        )
