from datetime import timedelta

from eventops.constants.tasks import TASK_TEMPLATES
from eventops.crud import crud_task
from eventops.schemas.task import TaskCreate, TaskUpdate
from eventops.utils.time_utils import utcnow

from tests.utils.auth import create_user
from tests.utils.event import create_random_event


def _setup(db):
    owner = create_user(db, email="tasks@example.com")
    return create_random_event(db, owner_id=owner.id)


def test_create_appends_sort_order(db_session):
    event = _setup(db_session)

    first = crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Book venue"), event_id=event.id
    )
    second = crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Hire caterer"), event_id=event.id
    )

    assert first.sort_order == 1
    assert second.sort_order == 2
    assert first.status == "todo"
    assert first.completed_at is None


def test_update_status_sets_and_clears_completed_at(db_session):
    event = _setup(db_session)
    task = crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Send invites"), event_id=event.id
    )

    task = crud_task.task.update(db_session, db_obj=task, obj_in=TaskUpdate(status="completed"))
    assert task.status == "completed"
    assert task.completed_at is not None

    task = crud_task.task.update(db_session, db_obj=task, obj_in=TaskUpdate(status="in_progress"))
    assert task.completed_at is None


def test_toggle_complete(db_session):
    event = _setup(db_session)
    task = crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Print badges"), event_id=event.id
    )

    task = crud_task.task.toggle_complete(db_session, db_obj=task)
    assert task.status == "completed"
    task = crud_task.task.toggle_complete(db_session, db_obj=task)
    assert task.status == "todo"
    assert task.completed_at is None


def test_template_falls_back_to_conference(db_session):
    event = _setup(db_session)
    crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Existing"), event_id=event.id
    )

    created = crud_task.task.create_from_template(
        db_session, event_id=event.id, template="no-such-template"
    )

    assert len(created) == len(TASK_TEMPLATES["conference"])
    assert [t.sort_order for t in created] == list(range(2, len(created) + 2))


def test_reorder_ignores_foreign_ids(db_session):
    event = _setup(db_session)
    a = crud_task.task.create_for_event(db_session, obj_in=TaskCreate(title="A"), event_id=event.id)
    b = crud_task.task.create_for_event(db_session, obj_in=TaskCreate(title="B"), event_id=event.id)

    tasks = crud_task.task.reorder(
        db_session, event_id=event.id, task_ids=[b.id, "task_elsewhere", a.id]
    )

    assert [t.id for t in tasks] == [b.id, a.id]
    assert b.sort_order == 1
    assert a.sort_order == 3


def test_summary_counts(db_session):
    event = _setup(db_session)
    now = utcnow()
    crud_task.task.create_for_event(
        db_session,
        obj_in=TaskCreate(title="Late", due_date=now - timedelta(days=1), priority="urgent"),
        event_id=event.id,
    )
    crud_task.task.create_for_event(
        db_session,
        obj_in=TaskCreate(title="Soon", due_date=now + timedelta(days=2)),
        event_id=event.id,
    )
    crud_task.task.create_for_event(
        db_session,
        obj_in=TaskCreate(title="Done", status="completed", due_date=now - timedelta(days=3)),
        event_id=event.id,
    )
    crud_task.task.create_for_event(
        db_session, obj_in=TaskCreate(title="Stuck", status="blocked"), event_id=event.id
    )

    summary = crud_task.task.get_summary(db_session, event_id=event.id)

    assert summary["total"] == 4
    assert summary["todo"] == 2
    assert summary["blocked"] == 1
    assert summary["completed"] == 1
    assert summary["overdue"] == 1
    assert summary["due_this_week"] == 1
    assert summary["urgent"] == 1
    assert summary["completion_rate"] == 25


def test_update_skips_null_for_required_columns(db_session):
    event = _setup(db_session)
    task = crud_task.task.create_for_event(
        db_session,
        obj_in=TaskCreate(title="Print badges", description="Two hundred", due_date=utcnow()),
        event_id=event.id,
    )

    task = crud_task.task.update(
        db_session,
        db_obj=task,
        obj_in=TaskUpdate(title=None, priority=None, due_date=None, description=None),
    )

    assert task.title == "Print badges"
    assert task.priority == "medium"
    assert task.due_date is None
    assert task.description is None
