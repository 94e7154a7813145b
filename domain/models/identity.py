"""
Identity models: organisations, identities, users and their groups.
"""

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Table
from sqlalchemy.orm import relationship

from domain.models.database import Base, package_args


user_group = Table(
    "identity_rel_user_group",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("identity_user.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", Integer, ForeignKey("identity_group.id", ondelete="CASCADE"), primary_key=True),
    info={"package": "identity"},
)


class Organisation(Base):
    __tablename__ = "identity_organisation"
    __table_args__ = package_args("identity")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)


class Identity(Base):
    """Physical or legal person a partner (customer, user) relates to"""

    __tablename__ = "identity_identity"
    __table_args__ = package_args("identity")

    id = Column(Integer, primary_key=True)
    firstname = Column(Text)
    lastname = Column(Text)
    legal_name = Column(Text)
    address_street = Column(Text)
    address_city = Column(Text)
    type_id = Column(Integer, ForeignKey("sale_customer_type.id"), default=1)
    # mirror of Customer.partner_identity_id (kept without FK to avoid a cycle)
    customer_id = Column(Integer, index=True)

    @property
    def display_name(self) -> str:
        if self.legal_name:
            return self.legal_name
        return " ".join(p for p in (self.firstname, self.lastname) if p)


class Group(Base):
    __tablename__ = "identity_group"
    __table_args__ = package_args("identity")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False, unique=True)

    users = relationship("User", secondary=user_group, back_populates="groups")


class User(Base):
    __tablename__ = "identity_user"
    __table_args__ = package_args("identity")

    id = Column(Integer, primary_key=True)
    login = Column(Text, nullable=False, unique=True)
    language = Column(Text, nullable=False, default="en")
    validated = Column(Boolean, default=True)
    identity_id = Column(Integer, ForeignKey("identity_identity.id"))
    organisation_id = Column(Integer, ForeignKey("identity_organisation.id"))

    identity = relationship("Identity")
    organisation = relationship("Organisation")
    groups = relationship("Group", secondary=user_group, back_populates="users")

    def has_group(self, name: str) -> bool:
        return any(g.name == name for g in self.groups)
