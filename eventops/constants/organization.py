# eventops/constants/organization.py
"""
Organization role and plan constants.
"""


class OrgRole:
    """Organization member roles, highest first."""
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"
    VIEWER = "viewer"

    HIERARCHY = {
        OWNER: 5,
        ADMIN: 4,
        MANAGER: 3,
        MEMBER: 2,
        VIEWER: 1,
    }

    @classmethod
    def has_permission(cls, role: str, required: str) -> bool:
        """True if `role` ranks at or above `required`."""
        return cls.HIERARCHY.get(role, 0) >= cls.HIERARCHY[required]


# plan -> (max_members, max_events); None means unlimited
PLAN_LIMITS = {
    "free": (5, 3),
    "pro": (20, 20),
    "business": (100, None),
    "enterprise": (1000, None),
}

INVITATION_TTL_DAYS = 7
