"""Price alert routes."""
from fastapi import APIRouter, Response

from stock_watchlist.deps import (AlertStoreDep, CurrentUser, PresenterDep,
                                  owner_id)
from stock_watchlist.schemas import AlertData, AlertRecord, AlertRow
from stock_watchlist.stores import OperationResult, http_status_for

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertRow])
async def get_alerts(
    user: CurrentUser, store: AlertStoreDep, presenter: PresenterDep
) -> list[AlertRow]:
    """Get the caller's alerts, newest first, each with the symbol's current price."""
    alerts = await store.list_for_owner(owner_id(user))
    return await presenter.alert_rows(alerts)


@router.post(
    "",
    response_model=OperationResult[AlertRecord],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_alert(
    body: AlertData, response: Response, user: CurrentUser, store: AlertStoreDep
) -> OperationResult[AlertRecord]:
    """Create a price alert.

    Body fields: symbol, company, alertName, alertType ("above"/"below"), threshold.
    """
    result = await store.create(owner_id(user), body)
    response.status_code = http_status_for(result, success_status=201)
    return result


@router.put(
    "/{alert_id}",
    response_model=OperationResult[AlertRecord],
    response_model_exclude_none=True,
)
async def update_alert(
    alert_id: str,
    body: AlertData,
    response: Response,
    user: CurrentUser,
    store: AlertStoreDep,
) -> OperationResult[AlertRecord]:
    """Replace an alert's fields. Alerts owned by someone else are reported as not found."""
    result = await store.update(alert_id, owner_id(user), body)
    response.status_code = http_status_for(result)
    return result


@router.delete(
    "/{alert_id}", response_model=OperationResult, response_model_exclude_none=True
)
async def delete_alert(
    alert_id: str, response: Response, user: CurrentUser, store: AlertStoreDep
) -> OperationResult:
    """Delete an alert. Deleting a missing alert succeeds."""
    result = await store.delete(alert_id, owner_id(user))
    response.status_code = http_status_for(result)
    return result
