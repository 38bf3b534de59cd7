"""
CustomerBook Backend — Customer List View
===========================================

What:  View model behind the customer management page: the customer grid
       plus one form shared by "Add Customer" and "Update".
How:   Holds a single snapshot of the customer list. The snapshot is never
       patched locally; after any mutation it is replaced by a full re-query.

State machine:
    IDLE ──load()──▶ LOADING ──▶ LOADED
                             └──▶ LOAD_FAILED   (error banner)

Form modes:
    edit_mode False: submit() creates a customer
    edit_mode True:  submit() updates `editing_id`
    Both then re-fetch (unless the caller re-fetches itself) and reset the form.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from app.clients.customer_api import CustomerApiClient
from app.exceptions import ApiClientError
from app.views.formatting import format_input_date, format_short_date

logger = logging.getLogger(__name__)


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


FORM_LABELS = {
    "name": "Customer Name",
    "date_of_birth": "Date of Birth",
    "member_number": "Member Number",
    "interests": "Interests",
}


@dataclass
class CustomerForm:
    """Raw form values, exactly as typed into the HTML inputs."""

    name: str = ""
    date_of_birth: str = ""
    member_number: str = ""
    interests: str = ""

    @classmethod
    def from_form_data(cls, data: Mapping[str, Any]) -> "CustomerForm":
        return cls(
            name=str(data.get("name", "")),
            date_of_birth=str(data.get("dateOfBirth", "")),
            member_number=str(data.get("memberNumber", "")),
            interests=str(data.get("interests", "")),
        )

    @classmethod
    def from_customer(cls, customer: Mapping[str, Any]) -> "CustomerForm":
        """Prefill for edit mode; the date is reformatted for <input type="date">."""
        return cls(
            name=customer["name"],
            date_of_birth=format_input_date(customer["dateOfBirth"]),
            member_number=str(customer["memberNumber"]),
            interests=customer["interests"],
        )

    def missing_fields(self) -> List[str]:
        return [
            label
            for attr, label in FORM_LABELS.items()
            if not getattr(self, attr).strip()
        ]

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for create/update. A non-numeric member number is sent
        as-is so the API reports it."""
        member_number: Any = self.member_number.strip()
        try:
            member_number = int(member_number)
        except ValueError:
            pass
        return {
            "name": self.name.strip(),
            "dateOfBirth": self.date_of_birth.strip(),
            "memberNumber": member_number,
            "interests": self.interests.strip(),
        }


@dataclass
class CustomerRow:
    """One grid row."""

    id: str
    name: str
    date_of_birth: str
    member_number: int
    interests: str

    @classmethod
    def from_customer(cls, customer: Mapping[str, Any]) -> "CustomerRow":
        return cls(
            id=str(customer["id"]),
            name=customer["name"],
            date_of_birth=format_short_date(customer["dateOfBirth"]),
            member_number=customer["memberNumber"],
            interests=customer["interests"],
        )

    @property
    def delete_prompt(self) -> str:
        return f"Are you sure you want to delete customer [{self.name}]?"


@dataclass
class CustomerListView:
    client: CustomerApiClient
    state: ListState = ListState.IDLE
    customers: List[Dict[str, Any]] = field(default_factory=list)
    form: CustomerForm = field(default_factory=CustomerForm)
    edit_mode: bool = False
    editing_id: Optional[str] = None
    error: Optional[str] = None
    error_status: Optional[int] = None

    @property
    def rows(self) -> List[CustomerRow]:
        return [CustomerRow.from_customer(c) for c in self.customers]

    async def load(self) -> None:
        """Replace the snapshot with a fresh list from the API."""
        self.state = ListState.LOADING
        try:
            customers = await self.client.list_customers()
        except ApiClientError as e:
            logger.warning("Customer list failed to load: %s", e.message)
            self.state = ListState.LOAD_FAILED
            self._fail(e)
            return
        self.customers = customers
        self.state = ListState.LOADED

    def start_edit(self, customer: Mapping[str, Any]) -> None:
        self.form = CustomerForm.from_customer(customer)
        self.editing_id = str(customer["id"])
        self.edit_mode = True

    def start_edit_by_id(self, customer_id: str) -> bool:
        """Enter edit mode for a customer in the current snapshot."""
        for customer in self.customers:
            if str(customer["id"]) == customer_id:
                self.start_edit(customer)
                return True
        self.error = "Customer not found"
        self.error_status = 404
        return False

    def stop_edit(self) -> None:
        self.form = CustomerForm()
        self.editing_id = None
        self.edit_mode = False

    async def submit(self, form: CustomerForm, refresh: bool = True) -> bool:
        """
        Create (or, in edit mode, update) from the form.

        On success: re-fetch (when `refresh`), leave edit mode and clear the form.
        On failure: keep the typed values and set `error`.

        Args:
            refresh: False when the caller re-queries itself, e.g. by
                     redirecting to the list page
        """
        self.form = form
        missing = form.missing_fields()
        if missing:
            self.error = "Required: " + ", ".join(missing)
            self.error_status = 400
            return False

        try:
            if self.edit_mode and self.editing_id:
                updated = await self.client.update_customer(self.editing_id, form.to_payload())
                if updated is None:
                    self.error = "Customer not found"
                    self.error_status = 404
                    return False
            else:
                await self.client.create_customer(form.to_payload())
        except ApiClientError as e:
            self._fail(e)
            return False

        if refresh:
            await self.load()
        self.stop_edit()
        return True

    async def delete(self, customer_id: str, refresh: bool = True) -> bool:
        """Delete (already confirmed by the user), then re-fetch.

        A customer that is already gone counts as deleted.
        """
        try:
            await self.client.delete_customer(customer_id)
        except ApiClientError as e:
            self._fail(e)
            return False
        if self.editing_id == customer_id:
            self.stop_edit()
        if refresh:
            await self.load()
        return True

    def _fail(self, exc: ApiClientError) -> None:
        self.error = exc.message
        self.error_status = exc.status_code
