"""Team and team membership database models."""

from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.core.constants import MAX_NAME_LENGTH
from taskhub.core.database.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin
from taskhub.core.permissions.roles import TeamRole


class Team(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A group of users inside one organization."""

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    memberships: Mapped[list["TeamMembership"]] = relationship(
        "TeamMembership",
        back_populates="team",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name={self.name})>"


class TeamMembership(Base, UUIDMixin, TimestampMixin):
    """A user's role within one team."""

    __tablename__ = "team_memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "team_id", name="uq_team_membership_user_team"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    team_id: Mapped[UUID] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[TeamRole] = mapped_column(
        Enum(TeamRole, name="team_role"),
        default=TeamRole.MEMBER,
        nullable=False,
    )

    team: Mapped["Team"] = relationship("Team", back_populates="memberships")

    def __repr__(self) -> str:
        return f"<TeamMembership(user_id={self.user_id}, team_id={self.team_id}, role={self.role})>"
