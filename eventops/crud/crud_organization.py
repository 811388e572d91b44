# eventops/crud/crud_organization.py
import secrets
from datetime import timedelta
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.constants.organization import INVITATION_TTL_DAYS, PLAN_LIMITS, OrgRole
from eventops.models.organization import (
    Organization,
    OrganizationMember,
    OrganizationInvitation,
)
from eventops.schemas.organization import OrganizationCreate, OrganizationUpdate
from eventops.utils.slug import generate_organization_slug
from eventops.utils.time_utils import as_utc, utcnow


class CRUDOrganization(CRUDBase[Organization, OrganizationCreate, OrganizationUpdate]):
    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Organization]:
        return db.query(self.model).filter(self.model.slug == slug).first()

    def create_with_owner(
        self, db: Session, *, obj_in: OrganizationCreate, owner_id: str
    ) -> Organization:
        """Create the organization and its owner membership in one commit."""
        plan = obj_in.plan.value
        max_members, max_events = PLAN_LIMITS[plan]
        now = utcnow()

        org = Organization(
            name=obj_in.name.strip(),
            slug=generate_organization_slug(obj_in.name, db),
            description=obj_in.description,
            logo_url=obj_in.logo_url,
            website=obj_in.website,
            owner_id=owner_id,
            plan=plan,
            max_members=max_members,
            max_events=max_events,
            status="active",
        )
        db.add(org)
        db.flush()

        db.add(
            OrganizationMember(
                organization_id=org.id,
                user_id=owner_id,
                role=OrgRole.OWNER,
                status="active",
                joined_at=now,
            )
        )
        db.commit()
        db.refresh(org)
        return org

    def get_for_user(self, db: Session, *, user_id: str) -> List[Tuple[Organization, str]]:
        """(organization, member role) pairs for the user's active memberships."""
        rows = (
            db.query(Organization, OrganizationMember.role)
            .join(OrganizationMember, OrganizationMember.organization_id == Organization.id)
            .filter(
                OrganizationMember.user_id == user_id,
                OrganizationMember.status == "active",
            )
            .order_by(Organization.name)
            .all()
        )
        return [(org, role) for org, role in rows]

    # ---- members ----

    def get_member(self, db: Session, id: str) -> Optional[OrganizationMember]:
        return db.query(OrganizationMember).filter(OrganizationMember.id == id).first()

    def get_membership(
        self, db: Session, *, organization_id: str, user_id: str
    ) -> Optional[OrganizationMember]:
        return (
            db.query(OrganizationMember)
            .filter(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.user_id == user_id,
            )
            .first()
        )

    def get_members(self, db: Session, *, organization_id: str) -> List[OrganizationMember]:
        members = (
            db.query(OrganizationMember)
            .filter(OrganizationMember.organization_id == organization_id)
            .all()
        )
        return sorted(members, key=lambda m: -OrgRole.HIERARCHY.get(m.role, 0))

    def count_active_members(self, db: Session, *, organization_id: str) -> int:
        return (
            db.query(OrganizationMember)
            .filter(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.status == "active",
            )
            .count()
        )

    def set_member_role(self, db: Session, *, member: OrganizationMember, role: str) -> OrganizationMember:
        member.role = role
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    def remove_member(self, db: Session, *, member: OrganizationMember) -> None:
        db.delete(member)
        db.commit()

    def transfer_ownership(
        self,
        db: Session,
        *,
        org: Organization,
        current_owner: Optional[OrganizationMember],
        new_owner: OrganizationMember,
    ) -> Organization:
        """New owner gets 'owner'; the previous owner stays on as admin."""
        org.owner_id = new_owner.user_id
        new_owner.role = OrgRole.OWNER
        db.add(new_owner)
        if current_owner is not None:
            current_owner.role = OrgRole.ADMIN
            db.add(current_owner)
        db.add(org)
        db.commit()
        db.refresh(org)
        return org

    # ---- invitations ----

    def get_invitation(self, db: Session, id: str) -> Optional[OrganizationInvitation]:
        return db.query(OrganizationInvitation).filter(OrganizationInvitation.id == id).first()

    def get_invitation_by_token(self, db: Session, *, token: str) -> Optional[OrganizationInvitation]:
        return (
            db.query(OrganizationInvitation)
            .filter(OrganizationInvitation.token == token)
            .first()
        )

    def get_pending_invitation(
        self, db: Session, *, organization_id: str, email: str
    ) -> Optional[OrganizationInvitation]:
        return (
            db.query(OrganizationInvitation)
            .filter(
                OrganizationInvitation.organization_id == organization_id,
                OrganizationInvitation.email == email.lower(),
                OrganizationInvitation.status == "pending",
            )
            .first()
        )

    def get_invitations(
        self, db: Session, *, organization_id: str, status: str | None = "pending"
    ) -> List[OrganizationInvitation]:
        query = db.query(OrganizationInvitation).filter(
            OrganizationInvitation.organization_id == organization_id
        )
        if status:
            query = query.filter(OrganizationInvitation.status == status)
        return query.order_by(OrganizationInvitation.created_at.desc()).all()

    def create_invitation(
        self,
        db: Session,
        *,
        organization_id: str,
        email: str,
        role: str,
        invited_by: str,
        message: Optional[str] = None,
    ) -> OrganizationInvitation:
        invitation = OrganizationInvitation(
            organization_id=organization_id,
            email=email.lower(),
            role=role,
            invited_by=invited_by,
            token=secrets.token_urlsafe(32),
            message=message,
            status="pending",
            expires_at=utcnow() + timedelta(days=INVITATION_TTL_DAYS),
        )
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
        return invitation

    def accept_invitation(
        self, db: Session, *, invitation: OrganizationInvitation, user_id: str
    ) -> OrganizationMember:
        """Turn an invitation into an active membership (reactivating an old one if present)."""
        now = utcnow()
        member = self.get_membership(
            db, organization_id=invitation.organization_id, user_id=user_id
        )
        if member is None:
            member = OrganizationMember(
                organization_id=invitation.organization_id,
                user_id=user_id,
            )
        member.role = invitation.role
        member.status = "active"
        member.invited_by = invitation.invited_by
        member.joined_at = now
        db.add(member)

        invitation.status = "accepted"
        invitation.accepted_at = now
        db.add(invitation)
        db.commit()
        db.refresh(member)
        return member

    def set_invitation_status(
        self, db: Session, *, invitation: OrganizationInvitation, status: str
    ) -> OrganizationInvitation:
        invitation.status = status
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
        return invitation

    def expire_invitations(self, db: Session) -> int:
        """Mark pending invitations past their expiry as expired. Returns the count."""
        now = utcnow()
        expired = 0
        pending = (
            db.query(OrganizationInvitation)
            .filter(OrganizationInvitation.status == "pending")
            .all()
        )
        for invitation in pending:
            if as_utc(invitation.expires_at) < now:
                invitation.status = "expired"
                db.add(invitation)
                expired += 1
        if expired:
            db.commit()
        return expired


organization = CRUDOrganization(Organization)
