"""
User Repository - Data access layer for users, identities and groups
"""

from typing import Optional, List
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import User, Identity, Group
from app.exceptions import ConflictError


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID with identity and groups loaded"""
        return (
            self.db.query(User)
            .options(selectinload(User.groups), selectinload(User.identity))
            .filter(User.id == user_id)
            .first()
        )

    def create_user(
        self,
        login: str,
        identity_id: int = None,
        organisation_id: int = None,
        groups: List[Group] = None,
        language: str = "en",
    ) -> User:
        """Create a new user"""
        user = User(
            login=login,
            identity_id=identity_id,
            organisation_id=organisation_id,
            language=language,
            groups=list(groups or []),
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User with login {login} already exists")


class IdentityRepository(BaseRepository[Identity]):
    """Repository for identity data access"""

    def __init__(self, db: Session):
        super().__init__(db, Identity)


class GroupRepository(BaseRepository[Group]):
    """Repository for group data access"""

    def __init__(self, db: Session):
        super().__init__(db, Group)

    def get_or_create(self, name: str) -> Group:
        group = self.db.query(Group).filter(Group.name == name).first()
        if group is None:
            group = Group(name=name)
            self.db.add(group)
            self.db.flush()
        return group
