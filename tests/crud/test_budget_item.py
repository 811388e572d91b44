from eventops.crud import crud_budget_item
from eventops.schemas.budget import BudgetItemCreate, BudgetItemUpdate

from tests.utils.auth import create_user
from tests.utils.event import create_random_event


def _item(db, event_id, **values):
    return crud_budget_item.budget_item.create_for_event(
        db, obj_in=BudgetItemCreate(**values), event_id=event_id
    )


def test_summary_excludes_cancelled_items(db_session):
    owner = create_user(db_session, email="budget@example.com")
    event = create_random_event(db_session, owner_id=owner.id, budget=100000)

    _item(db_session, event.id, category="venue", name="Hall", estimated_amount=40000,
          actual_amount=45000, status="paid")
    _item(db_session, event.id, category="catering", name="Lunch", estimated_amount=20000,
          status="committed")
    _item(db_session, event.id, category="catering", name="Coffee", estimated_amount=5000)
    _item(db_session, event.id, category="av", name="Projector", estimated_amount=9000,
          status="cancelled")

    summary = crud_budget_item.budget_item.get_summary(db_session, event=event)

    assert summary["item_count"] == 3
    assert summary["total_estimated"] == 65000
    assert summary["total_actual"] == 45000
    assert summary["total_paid"] == 45000
    assert summary["total_committed"] == 20000
    assert summary["total_planned"] == 0
    assert summary["variance"] == -20000
    assert summary["by_category"]["catering"] == {"estimated": 25000, "actual": 0, "count": 2}
    assert "av" not in summary["by_category"]
    assert summary["event_budget"] == 100000
    assert summary["remaining"] == 35000


def test_paid_at_is_set_once(db_session):
    owner = create_user(db_session, email="budget2@example.com")
    event = create_random_event(db_session, owner_id=owner.id)
    item = _item(db_session, event.id, category="venue", name="Deposit", estimated_amount=1000)
    assert item.paid_at is None

    item = crud_budget_item.budget_item.update(
        db_session, db_obj=item, obj_in=BudgetItemUpdate(status="paid")
    )
    first_paid_at = item.paid_at
    assert first_paid_at is not None

    item = crud_budget_item.budget_item.update(
        db_session, db_obj=item, obj_in=BudgetItemUpdate(notes="receipt filed", status="paid")
    )
    assert item.paid_at == first_paid_at


def test_bulk_status_only_touches_the_event(db_session):
    owner = create_user(db_session, email="budget3@example.com")
    event = create_random_event(db_session, owner_id=owner.id)
    other = create_random_event(db_session, owner_id=owner.id)
    mine = _item(db_session, event.id, category="venue", name="Mine")
    theirs = _item(db_session, other.id, category="venue", name="Theirs")

    updated = crud_budget_item.budget_item.bulk_update_status(
        db_session, event_id=event.id, item_ids=[mine.id, theirs.id], status="committed"
    )

    assert updated == 1
    db_session.refresh(theirs)
    assert theirs.status == "planned"
