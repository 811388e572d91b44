from datetime import timedelta

from eventops.crud import crud_organization
from eventops.schemas.organization import OrganizationCreate
from eventops.utils.time_utils import utcnow

from tests.utils.auth import create_user


def test_create_with_owner_adds_membership_and_unique_slug(db_session):
    owner = create_user(db_session, email="founder@example.com")

    first = crud_organization.organization.create_with_owner(
        db_session, obj_in=OrganizationCreate(name="Acme Events!"), owner_id=owner.id
    )
    second = crud_organization.organization.create_with_owner(
        db_session, obj_in=OrganizationCreate(name="Acme Events"), owner_id=owner.id
    )

    assert first.slug == "acme-events"
    assert second.slug != first.slug
    assert second.slug.startswith("acme-events")
    assert first.max_members == 5

    membership = crud_organization.organization.get_membership(
        db_session, organization_id=first.id, user_id=owner.id
    )
    assert membership.role == "owner"
    assert membership.status == "active"


def test_expire_invitations(db_session):
    owner = create_user(db_session, email="inviter@example.com")
    org = crud_organization.organization.create_with_owner(
        db_session, obj_in=OrganizationCreate(name="Expiry Co"), owner_id=owner.id
    )
    stale = crud_organization.organization.create_invitation(
        db_session, organization_id=org.id, email="Late@Example.com", role="member",
        invited_by=owner.id,
    )
    fresh = crud_organization.organization.create_invitation(
        db_session, organization_id=org.id, email="new@example.com", role="member",
        invited_by=owner.id,
    )
    stale.expires_at = utcnow() - timedelta(hours=1)
    db_session.commit()

    assert crud_organization.organization.expire_invitations(db_session) == 1

    db_session.refresh(stale)
    db_session.refresh(fresh)
    assert stale.status == "expired"
    assert stale.email == "late@example.com"
    assert fresh.status == "pending"


def test_transfer_ownership_demotes_previous_owner(db_session):
    owner = create_user(db_session, email="old-owner@example.com")
    successor = create_user(db_session, email="new-owner@example.com")
    org = crud_organization.organization.create_with_owner(
        db_session, obj_in=OrganizationCreate(name="Handover"), owner_id=owner.id
    )
    invitation = crud_organization.organization.create_invitation(
        db_session, organization_id=org.id, email=successor.email, role="admin",
        invited_by=owner.id,
    )
    new_member = crud_organization.organization.accept_invitation(
        db_session, invitation=invitation, user_id=successor.id
    )
    current = crud_organization.organization.get_membership(
        db_session, organization_id=org.id, user_id=owner.id
    )

    org = crud_organization.organization.transfer_ownership(
        db_session, org=org, current_owner=current, new_owner=new_member
    )

    assert org.owner_id == successor.id
    assert new_member.role == "owner"
    assert current.role == "admin"
