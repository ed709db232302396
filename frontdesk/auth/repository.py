"""
User repository - persistence of portal accounts.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.deadline import Deadline
from ..core.storage import apply_deadline, storage_errors
from .exceptions import EmailAlreadyExistsException
from .models import User, UserRole

# Set up logging
logger = logging.getLogger(__name__)


class UserRepository:
    """
    Looks up and stores users.

    Email lookup is an exact match; no case folding happens here.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str, deadline: Optional[Deadline] = None) -> Optional[User]:
        with storage_errors(self.db, "looking up user by email"):
            apply_deadline(self.db, deadline)
            return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int, deadline: Optional[Deadline] = None) -> Optional[User]:
        with storage_errors(self.db, "looking up user by id"):
            apply_deadline(self.db, deadline)
            return self.db.query(User).filter(User.id == user_id).first()

    def exists_with_role(self, role: UserRole) -> bool:
        with storage_errors(self.db, "counting users by role"):
            return self.db.query(User).filter(User.role == role).count() > 0

    def save(self, user: User, deadline: Optional[Deadline] = None) -> User:
        """
        Insert or update a user and commit.

        Raises:
            EmailAlreadyExistsException: If the unique email index rejects the row
        """
        with storage_errors(self.db, "saving user"):
            apply_deadline(self.db, deadline)
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning(f"Save rejected: email {user.email} already registered")
                raise EmailAlreadyExistsException()
            self.db.refresh(user)
            return user
