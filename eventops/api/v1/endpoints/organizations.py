# eventops/api/v1/endpoints/organizations.py
"""
Organizations: teams of users sharing events. Members hold a role
(owner > admin > manager > member > viewer); admins manage invitations and
roles, and only the owner can delete the organization or hand it over.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.constants.organization import OrgRole
from eventops.crud import crud_organization, crud_user
from eventops.db.session import get_db
from eventops.models.organization import Organization, OrganizationMember
from eventops.models.user import User
from eventops.schemas.organization import (
    Invitation,
    InvitationAccept,
    InvitationCreate,
    Member,
    MemberRoleUpdate,
    MyOrganization,
    Organization as OrganizationSchema,
    OrganizationCreate,
    OrganizationUpdate,
    OwnershipTransfer,
)
from eventops.schemas.token import TokenPayload
from eventops.utils.time_utils import as_utc, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


def _get_org(db: Session, org_id: str) -> Organization:
    org = crud_organization.organization.get(db, id=org_id)
    if not org:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return org


def _require_role(
    db: Session, org_id: str, user_id: str, required: str, detail: str
) -> OrganizationMember:
    """The caller's active membership, if it ranks at or above `required`."""
    membership = crud_organization.organization.get_membership(
        db, organization_id=org_id, user_id=user_id
    )
    if (
        not membership
        or membership.status != "active"
        or not OrgRole.has_permission(membership.role, required)
    ):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return membership


def _get_member(db: Session, member_id: str) -> OrganizationMember:
    member = crud_organization.organization.get_member(db, id=member_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


@router.post("", response_model=OrganizationSchema, status_code=status.HTTP_201_CREATED)
def create_organization(
    org_in: OrganizationCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Create an organization with a unique slug; the caller becomes its owner."""
    org = crud_organization.organization.create_with_owner(
        db, obj_in=org_in, owner_id=current_user.sub
    )
    logger.info(f"Organization {org.id} ({org.slug}) created by {current_user.sub}")
    return org


@router.get("/mine", response_model=List[MyOrganization])
def list_my_organizations(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    pairs = crud_organization.organization.get_for_user(db, user_id=current_user.sub)
    return [
        {**OrganizationSchema.model_validate(org).model_dump(), "member_role": role}
        for org, role in pairs
    ]


@router.get("/slug/{slug}", response_model=OrganizationSchema)
def get_organization_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    org = crud_organization.organization.get_by_slug(db, slug=slug)
    if not org:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return org


@router.post("/invitations/accept", response_model=Member)
def accept_invitation(
    accept_in: InvitationAccept,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_db_user),
):
    invitation = crud_organization.organization.get_invitation_by_token(
        db, token=accept_in.token
    )
    if not invitation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    if invitation.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invitation is no longer valid"
        )
    if as_utc(invitation.expires_at) < utcnow():
        crud_organization.organization.set_invitation_status(
            db, invitation=invitation, status="expired"
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invitation has expired")
    if invitation.email.lower() != current_user.email.lower():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This invitation was sent to a different email address",
        )

    return crud_organization.organization.accept_invitation(
        db, invitation=invitation, user_id=current_user.id
    )


@router.delete("/invitations/{invitationId}", status_code=status.HTTP_204_NO_CONTENT)
def revoke_invitation(
    invitationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    invitation = crud_organization.organization.get_invitation(db, id=invitationId)
    if not invitation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    _require_role(
        db,
        invitation.organization_id,
        current_user.sub,
        OrgRole.ADMIN,
        "Not authorized to revoke invitations",
    )
    crud_organization.organization.set_invitation_status(
        db, invitation=invitation, status="revoked"
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/members/{memberId}", response_model=Member)
def update_member_role(
    memberId: str,
    role_in: MemberRoleUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    member = _get_member(db, memberId)
    _require_role(
        db,
        member.organization_id,
        current_user.sub,
        OrgRole.ADMIN,
        "Not authorized to update member roles",
    )
    if member.role == OrgRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change the owner role. Transfer ownership instead.",
        )
    return crud_organization.organization.set_member_role(
        db, member=member, role=role_in.role.value
    )


@router.delete("/members/{memberId}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    memberId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Admins can remove members; anyone can leave. The owner can never be removed."""
    member = _get_member(db, memberId)

    if member.user_id != current_user.sub:
        _require_role(
            db,
            member.organization_id,
            current_user.sub,
            OrgRole.ADMIN,
            "Not authorized to remove this member",
        )
    if member.role == OrgRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove the owner. Transfer ownership first.",
        )

    crud_organization.organization.remove_member(db, member=member)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{orgId}", response_model=OrganizationSchema)
def get_organization(
    orgId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return _get_org(db, orgId)


@router.patch("/{orgId}", response_model=OrganizationSchema)
def update_organization(
    orgId: str,
    org_in: OrganizationUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    org = _get_org(db, orgId)
    _require_role(
        db, org.id, current_user.sub, OrgRole.ADMIN, "Not authorized to update this organization"
    )
    return crud_organization.organization.update(db, db_obj=org, obj_in=org_in)


@router.delete("/{orgId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_organization(
    orgId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Owner only. Members and invitations go with it."""
    org = _get_org(db, orgId)
    if org.owner_id != current_user.sub:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can delete this organization",
        )
    crud_organization.organization.remove(db, id=org.id)
    logger.info(f"Organization {org.id} deleted by {current_user.sub}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{orgId}/members", response_model=List[Member])
def list_members(
    orgId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Active members, highest role first. Visible to active members only."""
    org = _get_org(db, orgId)
    _require_role(db, org.id, current_user.sub, OrgRole.VIEWER, "Not authorized")
    members = crud_organization.organization.get_members(db, organization_id=org.id)
    return [member for member in members if member.status == "active"]


@router.get("/{orgId}/invitations", response_model=List[Invitation])
def list_invitations(
    orgId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    org = _get_org(db, orgId)
    _require_role(db, org.id, current_user.sub, OrgRole.ADMIN, "Not authorized")
    return crud_organization.organization.get_invitations(db, organization_id=org.id)


@router.post(
    "/{orgId}/invitations", response_model=Invitation, status_code=status.HTTP_201_CREATED
)
def invite_member(
    orgId: str,
    invite_in: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Invite someone by email. The invitation carries a token that the
    invitee presents to `/organizations/invitations/accept` within 7 days.
    """
    _require_role(db, orgId, current_user.sub, OrgRole.ADMIN, "Not authorized to invite members")
    org = _get_org(db, orgId)

    member_count = crud_organization.organization.count_active_members(
        db, organization_id=org.id
    )
    if member_count >= org.max_members:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Organization has reached maximum members ({org.max_members})",
        )

    if crud_organization.organization.get_pending_invitation(
        db, organization_id=org.id, email=invite_in.email
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An invitation already exists for this email",
        )

    existing_user = crud_user.user.get_by_email(db, email=invite_in.email)
    if existing_user:
        membership = crud_organization.organization.get_membership(
            db, organization_id=org.id, user_id=existing_user.id
        )
        if membership and membership.status == "active":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User is already a member of this organization",
            )

    return crud_organization.organization.create_invitation(
        db,
        organization_id=org.id,
        email=invite_in.email,
        role=invite_in.role.value,
        invited_by=current_user.sub,
        message=invite_in.message,
    )


@router.post("/{orgId}/transfer-ownership", response_model=OrganizationSchema)
def transfer_ownership(
    orgId: str,
    transfer_in: OwnershipTransfer,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Hand the organization to another active member; the old owner stays on as admin."""
    org = _get_org(db, orgId)
    if org.owner_id != current_user.sub:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can transfer ownership",
        )

    new_owner = crud_organization.organization.get_membership(
        db, organization_id=org.id, user_id=transfer_in.new_owner_id
    )
    if not new_owner or new_owner.status != "active":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New owner must be an active member of the organization",
        )

    current_owner: Optional[OrganizationMember] = crud_organization.organization.get_membership(
        db, organization_id=org.id, user_id=current_user.sub
    )
    return crud_organization.organization.transfer_ownership(
        db, org=org, current_owner=current_owner, new_owner=new_owner
    )
