from datetime import UTC, datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from ..core.errors import RecordNotFoundError, StorageUnavailableError
from ..models import CreditCreate, CreditUpdate, DebitCreate, DebitUpdate
from ..services import CREDITS, DEBITS, RecordService


@pytest.fixture
def credits(session) -> RecordService:
    return RecordService(session, CREDITS)


@pytest.fixture
def debits(session) -> RecordService:
    return RecordService(session, DEBITS)


def _credit_payload(**overrides) -> CreditCreate:
    data = {
        "accountId": "acc-1",
        "from": "Acme",
        "description": "Invoice 42",
        "amount": 120.5,
        "date": "2024-03-01T12:00:00Z",
    }
    data.update(overrides)
    return CreditCreate.model_validate(data)


def test_create_assigns_id_and_timestamps(credits: RecordService) -> None:
    credit = credits.create(_credit_payload())

    assert credit.id is not None
    assert credit.from_ == "Acme"
    assert credit.account_id == "acc-1"
    assert credit.amount == 120.5
    assert credit.date == datetime(2024, 3, 1, 12, tzinfo=UTC)
    assert credit.created_at == credit.updated_at


def test_create_requires_every_field() -> None:
    for missing in ("accountId", "from", "description", "amount", "date"):
        data = _credit_payload().model_dump(by_alias=True)
        data.pop(missing)
        with pytest.raises(ValidationError):
            CreditCreate.model_validate(data)


def test_create_rejects_empty_strings() -> None:
    with pytest.raises(ValidationError):
        _credit_payload(description="")


def test_get_by_id_is_idempotent(credits: RecordService) -> None:
    created = credits.create(_credit_payload())

    first = credits.get_by_id(created.id)
    second = credits.get_by_id(created.id)

    assert first == second == created


def test_get_by_id_returns_none_when_absent(credits: RecordService) -> None:
    assert credits.get_by_id(uuid4()) is None


def test_update_changes_only_patched_fields(credits: RecordService) -> None:
    created = credits.create(_credit_payload())

    updated = credits.update_by_id(created.id, CreditUpdate.model_validate({"amount": 99}))

    assert updated.amount == 99
    assert updated.updated_at >= created.updated_at
    untouched = {"id", "account_id", "from_", "description", "date", "created_at"}
    assert updated.model_dump(include=untouched) == created.model_dump(include=untouched)


def test_update_counterparty_by_public_name(credits: RecordService) -> None:
    created = credits.create(_credit_payload())

    updated = credits.update_by_id(created.id, CreditUpdate.model_validate({"from": "Globex"}))

    assert updated.from_ == "Globex"
    assert credits.get_by_id(created.id).from_ == "Globex"


def test_update_missing_record_raises(credits: RecordService) -> None:
    with pytest.raises(RecordNotFoundError, match="Credit not found"):
        credits.update_by_id(uuid4(), CreditUpdate.model_validate({"amount": 1}))


def test_update_requires_at_least_one_field(credits: RecordService) -> None:
    with pytest.raises(ValidationError):
        CreditUpdate.model_validate({})
    with pytest.raises(ValidationError):
        CreditUpdate.model_validate({"amount": None})

    created = credits.create(_credit_payload())
    with pytest.raises(ValueError, match="At least one field"):
        credits.update_by_id(created.id, CreditUpdate.model_construct())


def test_update_cannot_touch_account_or_timestamps() -> None:
    with pytest.raises(ValidationError):
        CreditUpdate.model_validate({"accountId": "other"})
    with pytest.raises(ValidationError):
        CreditUpdate.model_validate({"createdAt": "2020-01-01T00:00:00Z"})


def test_delete_returns_record_and_removes_it(credits: RecordService) -> None:
    created = credits.create(_credit_payload())

    removed = credits.delete_by_id(created.id)

    assert removed == created
    assert credits.get_by_id(created.id) is None
    with pytest.raises(RecordNotFoundError):
        credits.delete_by_id(created.id)


def test_query_returns_page_of_responses(credits: RecordService) -> None:
    credits.create(_credit_payload(**{"from": "Acme", "amount": 10}))
    credits.create(_credit_payload(**{"from": "Acme", "amount": 20}))
    credits.create(_credit_payload(**{"from": "Globex", "amount": 30}))

    page = credits.query({"from_": "Acme"}, {"sortBy": "amount:desc", "limit": 1})

    assert [credit.amount for credit in page.results] == [20]
    assert page.total_results == 2
    assert page.total_pages == 2
    dumped = page.model_dump(by_alias=True)
    assert set(dumped) == {"results", "page", "limit", "totalPages", "totalResults"}
    assert dumped["results"][0]["from"] == "Acme"


def test_service_default_limit(session) -> None:
    service = RecordService(session, CREDITS, default_limit=2)
    for amount in range(3):
        service.create(_credit_payload(amount=amount))

    page = service.query({}, {})

    assert page.limit == 2
    assert page.total_pages == 2


def test_debits_are_independent_of_credits(credits: RecordService, debits: RecordService) -> None:
    credits.create(_credit_payload())
    debit = debits.create(
        DebitCreate.model_validate(
            {
                "accountId": "acc-1",
                "to": "Landlord",
                "description": "Rent",
                "amount": 900,
                "date": "2024-03-02T00:00:00Z",
            }
        )
    )

    assert debit.to == "Landlord"
    assert debits.query({}, {}).total_results == 1
    assert credits.get_by_id(debit.id) is None

    updated = debits.update_by_id(debit.id, DebitUpdate.model_validate({"to": "Utility"}))
    assert updated.to == "Utility"
    assert updated.description == "Rent"


def test_failed_commit_raises_storage_unavailable(credits: RecordService, session, monkeypatch) -> None:
    def _broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", _broken_commit)

    with pytest.raises(StorageUnavailableError):
        credits.create(_credit_payload())

    monkeypatch.undo()
    assert credits.query({}, {}).total_results == 0


def _broken_flush(*args, **kwargs):
    raise OperationalError("FLUSH", {}, Exception("database is locked"))


def test_failed_update_leaves_record_unchanged(credits: RecordService, session, monkeypatch) -> None:
    created = credits.create(_credit_payload())

    monkeypatch.setattr(session, "flush", _broken_flush)
    with pytest.raises(StorageUnavailableError):
        credits.update_by_id(created.id, CreditUpdate.model_validate({"amount": 1, "from": "Globex"}))
    monkeypatch.undo()

    assert credits.get_by_id(created.id) == created


def test_failed_delete_keeps_record(credits: RecordService, session, monkeypatch) -> None:
    created = credits.create(_credit_payload())

    monkeypatch.setattr(session, "flush", _broken_flush)
    with pytest.raises(StorageUnavailableError):
        credits.delete_by_id(created.id)
    monkeypatch.undo()

    assert credits.get_by_id(created.id) == created
    assert credits.query({}, {}).total_results == 1
