"""Tests for AlertStore: validation, owner scoping, ordering, idempotent delete."""
import pytest

from stock_watchlist.db import AlertType, Database
from stock_watchlist.schemas import AlertData
from stock_watchlist.stores import AlertStore, ErrorKind
from tests.support.fakes import ListenerSpy


def alert_data(**overrides) -> AlertData:
    fields = {
        "symbol": "aapl",
        "company": "Apple Inc.",
        "alert_name": "Dip",
        "alert_type": "below",
        "threshold": "180",
    }
    fields.update(overrides)
    return AlertData(**fields)


async def test_create_normalizes_and_parses_threshold(alert_store: AlertStore):
    result = await alert_store.create(
        "u1",
        AlertData(
            symbol="tsla",
            company=" Tesla, Inc. ",
            alert_name=" Breakout ",
            alert_type="upper",
            threshold="250.5",
        ),
    )

    assert result.success is True
    record = result.data
    assert record.symbol == "TSLA"
    assert record.company == "Tesla, Inc."
    assert record.alert_name == "Breakout"
    assert record.alert_type is AlertType.ABOVE
    assert record.threshold == 250.5
    assert isinstance(record.threshold, float)
    assert record.id

    [stored] = await alert_store.list_for_owner("u1")
    assert stored == record


async def test_created_ids_are_unique(alert_store: AlertStore):
    first = await alert_store.create("u1", alert_data())
    second = await alert_store.create("u1", alert_data())

    assert first.data.id != second.data.id


@pytest.mark.parametrize(
    "overrides",
    [
        {"threshold": "abc"},
        {"threshold": ""},
        {"threshold": None},
        {"threshold": "nan"},
        {"threshold": "inf"},
        {"threshold": -1},
        {"alert_name": ""},
        {"alert_name": "   "},
        {"symbol": " "},
        {"company": ""},
        {"alert_type": "sideways"},
        {"alert_type": None},
    ],
)
async def test_create_rejects_invalid_input_without_persisting(
    alert_store: AlertStore, listener: ListenerSpy, overrides
):
    result = await alert_store.create("u1", alert_data(**overrides))

    assert result.success is False
    assert result.error == "Invalid alert data"
    assert result.error_kind is ErrorKind.INVALID_INPUT
    assert result.data is None
    assert await alert_store.list_for_owner("u1") == []
    assert listener.events == []


async def test_numeric_threshold_is_accepted(alert_store: AlertStore):
    result = await alert_store.create("u1", alert_data(threshold=0))

    assert result.success is True
    assert result.data.threshold == 0.0


async def test_list_is_newest_first(alert_store: AlertStore):
    a = await alert_store.create("u1", alert_data(alert_name="A"))
    b = await alert_store.create("u1", alert_data(alert_name="B"))
    c = await alert_store.create("u1", alert_data(alert_name="C"))
    await alert_store.create("u2", alert_data(alert_name="other"))

    alerts = await alert_store.list_for_owner("u1")

    assert [x.id for x in alerts] == [c.data.id, b.data.id, a.data.id]


async def test_update_replaces_fields(alert_store: AlertStore):
    created = await alert_store.create("u1", alert_data())

    result = await alert_store.update(
        created.data.id,
        "u1",
        alert_data(symbol=" msft ", company="Microsoft", alert_name="Rally",
                   alert_type="above", threshold="410.25"),
    )

    assert result.success is True
    assert result.data.id == created.data.id
    assert result.data.symbol == "MSFT"
    assert result.data.alert_name == "Rally"
    assert result.data.alert_type is AlertType.ABOVE
    assert result.data.threshold == 410.25
    assert await alert_store.list_for_owner("u1") == [result.data]


async def test_update_of_another_owners_alert_is_not_found(alert_store: AlertStore):
    created = await alert_store.create("owner-a", alert_data())

    result = await alert_store.update(created.data.id, "owner-b", alert_data(threshold="1"))

    assert result.success is False
    assert result.error == "Alert not found"
    assert result.error_kind is ErrorKind.NOT_FOUND
    assert await alert_store.list_for_owner("owner-a") == [created.data]


async def test_update_unknown_id_is_not_found(alert_store: AlertStore):
    result = await alert_store.update("does-not-exist", "u1", alert_data())

    assert result.error_kind is ErrorKind.NOT_FOUND


async def test_update_validates_like_create(alert_store: AlertStore):
    created = await alert_store.create("u1", alert_data())

    bad = await alert_store.update(created.data.id, "u1", alert_data(threshold="abc"))
    missing_id = await alert_store.update("", "u1", alert_data())
    bad_type = await alert_store.update(created.data.id, "u1", alert_data(alert_type="up"))

    assert bad.error_kind is ErrorKind.INVALID_INPUT
    assert missing_id.error_kind is ErrorKind.INVALID_INPUT
    assert bad_type.error_kind is ErrorKind.INVALID_INPUT
    assert await alert_store.list_for_owner("u1") == [created.data]


async def test_delete_is_scoped_and_idempotent(alert_store: AlertStore):
    created = await alert_store.create("u1", alert_data())

    foreign = await alert_store.delete(created.data.id, "u2")
    assert foreign.success is True
    assert len(await alert_store.list_for_owner("u1")) == 1

    first = await alert_store.delete(created.data.id, "u1")
    again = await alert_store.delete(created.data.id, "u1")
    assert first.success is True
    assert again.success is True
    assert await alert_store.list_for_owner("u1") == []


async def test_delete_requires_id(alert_store: AlertStore):
    result = await alert_store.delete("", "u1")

    assert result.success is False
    assert result.error == "Missing alert id"
    assert result.error_kind is ErrorKind.INVALID_INPUT


async def test_anonymous_caller_is_rejected(broken_database: Database):
    listener = ListenerSpy()
    store = AlertStore(broken_database, error_listener=listener)

    for result in (
        await store.create(None, alert_data()),
        await store.update("abc", None, alert_data()),
        await store.delete("abc", None),
    ):
        assert result.success is False
        assert result.error == "Not authenticated"
        assert result.error_kind is ErrorKind.NOT_AUTHENTICATED
    assert await store.list_for_owner(None) == []
    assert listener.events == []
    assert broken_database.initialized is False


async def test_storage_failure_is_reported_and_collapsed(broken_database: Database):
    listener = ListenerSpy()
    store = AlertStore(broken_database, error_listener=listener)

    created = await store.create("u1", alert_data())
    updated = await store.update("abc", "u1", alert_data())
    deleted = await store.delete("abc", "u1")
    listed = await store.list_for_owner("u1")

    assert (created.error, updated.error, deleted.error) == (
        "Failed to create alert",
        "Failed to update alert",
        "Failed to delete alert",
    )
    assert {created.error_kind, updated.error_kind, deleted.error_kind} == {
        ErrorKind.STORAGE_UNAVAILABLE
    }
    assert listed == []
    assert [op for op, _ in listener.events] == [
        "createAlert",
        "updateAlert",
        "deleteAlert",
        "getAlertsForUser",
    ]
