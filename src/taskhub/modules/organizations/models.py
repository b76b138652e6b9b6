"""Organization and membership database models."""

from enum import StrEnum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from taskhub.core.database.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin
from taskhub.core.permissions.roles import OrgRole


class PlanType(StrEnum):
    FREE = "FREE"
    TEAM = "TEAM"
    BUSINESS = "BUSINESS"
    ENTERPRISE = "ENTERPRISE"


class Organization(Base, UUIDMixin, TimestampMixin):
    """A tenant: the isolation boundary for teams, memberships and tasks."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    plan: Mapped[PlanType] = mapped_column(
        Enum(PlanType, name="plan_type"),
        default=PlanType.FREE,
        nullable=False,
    )

    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="organization",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug})>"


class Membership(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A user's role within one organization.

    At most one membership exists per (user, organization) pair.
    """

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "organization_id", name="uq_membership_user_org"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[OrgRole] = mapped_column(
        Enum(OrgRole, name="org_role"),
        default=OrgRole.MEMBER,
        nullable=False,
    )

    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="memberships",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<Membership(user_id={self.user_id}, "
            f"organization_id={self.organization_id}, role={self.role})>"
        )
