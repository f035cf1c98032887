# ================================
# BROWSE SESSION STATE (utils/browse_state.py)
# ================================

"""
Immutable client session state with pure transitions.

A screen renderer receives a ``BrowseState`` and dispatches ``BrowseAction``s;
``reduce(state, action)`` returns the next state and never mutates its input.
"""

import enum
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from campus_storage.core.exceptions import ValidationError
from campus_storage.schemas.listing import ListingCriteria


class BrowseView(str, enum.Enum):
    HOMEPAGE = "homepage"
    SEARCH = "search"
    LIST_SPACE = "list_space"
    STORAGE_DETAILS = "storage_details"
    BOOKING_CONFIRMATION = "booking_confirmation"
    BOOKING_SUCCESS = "booking_success"
    MANAGE_LISTINGS = "manage_listings"
    MANAGE_RESERVATIONS = "manage_reservations"
    LISTING_SUCCESS = "listing_success"


# Where "back" leads from each view
BACK_TARGETS = {
    BrowseView.STORAGE_DETAILS: BrowseView.SEARCH,
    BrowseView.BOOKING_CONFIRMATION: BrowseView.STORAGE_DETAILS,
}


class BookingDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    storage_space_id: uuid.UUID
    start_date: date
    end_date: date
    total_price: Decimal
    special_requests: str = ""


class BrowseState(BaseModel):
    model_config = ConfigDict(frozen=True)

    view: BrowseView = BrowseView.HOMEPAGE
    selected_listing_id: Optional[uuid.UUID] = None
    criteria: ListingCriteria = Field(default_factory=ListingCriteria)
    page: int = 1
    booking_draft: Optional[BookingDraft] = None


class BrowseAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


def _navigate(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    try:
        view = BrowseView(payload.get("view"))
    except ValueError:
        raise ValidationError(f"Unknown view: {payload.get('view')}")
    return state.model_copy(update={"view": view})


def _select_listing(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    listing_id = payload.get("listing_id")
    if listing_id is None:
        raise ValidationError("listing_id is required")
    try:
        selected = uuid.UUID(str(listing_id))
    except ValueError:
        raise ValidationError(f"Invalid listing_id: {listing_id}")
    return state.model_copy(update={
        "view": BrowseView.STORAGE_DETAILS,
        "selected_listing_id": selected,
        "booking_draft": None,
    })


def _update_filters(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    merged = {**state.criteria.model_dump(exclude_none=True), **payload}
    try:
        criteria = ListingCriteria.model_validate(merged)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid filters: {e.errors()[0]['msg']}")
    # New filters always start from the first page
    return state.model_copy(update={"view": BrowseView.SEARCH, "criteria": criteria, "page": 1})


def _change_page(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    page = payload.get("page")
    if not isinstance(page, int) or page < 1:
        raise ValidationError("Page must be a positive integer")
    return state.model_copy(update={"page": page})


def _start_booking(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    if state.selected_listing_id is None:
        raise ValidationError("Select a storage space before booking")
    try:
        draft = BookingDraft(storage_space_id=state.selected_listing_id, **payload)
    except (PydanticValidationError, TypeError) as e:
        raise ValidationError(f"Invalid booking draft: {e}")
    return state.model_copy(update={"view": BrowseView.BOOKING_CONFIRMATION, "booking_draft": draft})


def _booking_confirmed(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    return state.model_copy(update={"view": BrowseView.BOOKING_SUCCESS, "booking_draft": None})


def _listing_created(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    return state.model_copy(update={"view": BrowseView.LISTING_SUCCESS})


def _go_back(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    target = BACK_TARGETS.get(state.view, BrowseView.HOMEPAGE)
    update: Dict[str, Any] = {"view": target}
    if target == BrowseView.HOMEPAGE:
        update.update(selected_listing_id=None, booking_draft=None)
    return state.model_copy(update=update)


def _reset(state: BrowseState, payload: Dict[str, Any]) -> BrowseState:
    return BrowseState()


REDUCERS = {
    "navigate": _navigate,
    "select_listing": _select_listing,
    "update_filters": _update_filters,
    "change_page": _change_page,
    "start_booking": _start_booking,
    "booking_confirmed": _booking_confirmed,
    "listing_created": _listing_created,
    "go_back": _go_back,
    "reset": _reset,
}


def reduce(state: BrowseState, action: BrowseAction) -> BrowseState:
    """Return the state that follows ``action``; ``state`` is left untouched"""
    reducer = REDUCERS.get(action.type)
    if reducer is None:
        raise ValidationError(f"Unknown action: {action.type}")
    return reducer(state, action.payload)
