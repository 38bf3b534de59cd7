"""
CustomerBook Backend — Browser UI Route Handlers
==================================================

What:  Server-rendered HTML pages for managing customers.
How:   Each handler builds a view model (CustomerListView/CustomerDetailView)
       around a CustomerApiClient, drives it, and renders a Jinja2 template.
       Mutations follow post/redirect/get: a successful POST answers
       303 → /customer, and that GET is the re-fetch.

Pages:
    GET  /customer                 grid + add form (?edit=<id> → edit mode)
    POST /customer                 create, or update when the hidden id is set
    POST /customer/{id}/delete     delete (confirmed in the browser)
    GET  /customer/edit/{id}       → /customer?edit=<id>
    GET  /customer/{id}            read-only profile
"""

import logging
from pathlib import Path
from typing import AsyncGenerator, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.clients.customer_api import CustomerApiClient, build_api_client
from app.views.detail_view import CustomerDetailView, DetailState
from app.views.list_view import CustomerForm, CustomerListView, ListState

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(prefix="/customer", tags=["Pages"], include_in_schema=False)

LIST_PATH = "/customer"


async def get_api_client(request: Request) -> AsyncGenerator[CustomerApiClient, None]:
    """One API client per page request, carrying the page's request id."""
    request_id = getattr(request.state, "request_id", None)
    async with build_api_client(app=request.app, request_id=request_id) as client:
        yield client


def _render_list(request: Request, view: CustomerListView, status_code: int = 200) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "customer_list.html",
        {"view": view, "ListState": ListState},
        status_code=status_code,
    )


def _failure_status(view: CustomerListView) -> int:
    if view.error_status and 400 <= view.error_status < 500:
        return view.error_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("", response_class=HTMLResponse)
async def customer_list_page(
    request: Request,
    edit: Optional[str] = None,
    client: CustomerApiClient = Depends(get_api_client),
) -> HTMLResponse:
    view = CustomerListView(client)
    await view.load()
    if view.state == ListState.LOAD_FAILED:
        return _render_list(request, view, _failure_status(view))
    if edit:
        view.start_edit_by_id(edit)
    return _render_list(request, view)


@router.post("", response_class=HTMLResponse)
async def customer_form_submit(
    request: Request,
    client: CustomerApiClient = Depends(get_api_client),
):
    data = await request.form()
    view = CustomerListView(client)
    editing_id = str(data.get("id") or "").strip()
    if editing_id:
        view.edit_mode = True
        view.editing_id = editing_id

    form = CustomerForm.from_form_data(data)
    if await view.submit(form, refresh=False):
        return RedirectResponse(LIST_PATH, status_code=status.HTTP_303_SEE_OTHER)

    # Failed: show the grid again with the typed values kept
    failure_status = _failure_status(view)
    error, error_status = view.error, view.error_status
    await view.load()
    view.error, view.error_status = error, error_status
    return _render_list(request, view, failure_status)


@router.post("/{customer_id}/delete", response_class=HTMLResponse)
async def customer_delete(
    request: Request,
    customer_id: str,
    client: CustomerApiClient = Depends(get_api_client),
):
    view = CustomerListView(client)
    if await view.delete(customer_id, refresh=False):
        return RedirectResponse(LIST_PATH, status_code=status.HTTP_303_SEE_OTHER)

    failure_status = _failure_status(view)
    error, error_status = view.error, view.error_status
    await view.load()
    view.error, view.error_status = error, error_status
    return _render_list(request, view, failure_status)


@router.get("/edit/{customer_id}")
async def customer_edit_redirect(customer_id: str) -> RedirectResponse:
    return RedirectResponse(
        f"{LIST_PATH}?edit={quote(customer_id)}", status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/{customer_id}", response_class=HTMLResponse)
async def customer_detail_page(
    request: Request,
    customer_id: str,
    client: CustomerApiClient = Depends(get_api_client),
) -> HTMLResponse:
    view = CustomerDetailView(client)
    await view.load(customer_id)

    status_code = {
        DetailState.LOADED: status.HTTP_200_OK,
        DetailState.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    }.get(view.state, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return templates.TemplateResponse(
        request,
        "customer_detail.html",
        {"view": view, "DetailState": DetailState, "list_path": LIST_PATH},
        status_code=status_code,
    )
