"""
User repository implementation for the Library System API.

Passwords are hashed with bcrypt before they reach the store. The plaintext
never leaves this module: lookups that need a password compare it against
stored hashes with ``bcrypt.checkpw``. When a password changes, the previous
hash is kept in ``user_password_history`` so reuse can be detected.
"""

import logging

import bcrypt
from sqlalchemy import func, select

from ..config import get_config
from ..models.user import User as UserModel
from ..models.user import UserCreate, UserSummary
from .repository import BaseRepository
from .schema import User as UserDB
from .schema import UserPasswordHistory
from .session import safe_commit, safe_query

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int) -> str:
    """Hash a plaintext password with a fresh salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class UserRepository(BaseRepository[UserDB, UserModel]):
    """Repository for staff accounts."""

    def __init__(self, session, bcrypt_rounds: int | None = None):
        super().__init__(session)
        self.bcrypt_rounds = bcrypt_rounds or get_config().bcrypt_rounds

    @property
    def model_class(self):
        return UserDB

    @property
    def response_schema(self):
        return UserModel

    @property
    def id_field(self) -> str:
        return "user_id"

    def _fetch_by_username(self, username: str) -> UserDB | None:
        query = select(UserDB).where(UserDB.username == username).execution_options(
            populate_existing=True
        )
        return safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            "Failed to get user by username",
        )

    def create_user(self, data: UserCreate) -> UserModel:
        """
        Insert a staff account, storing only the password hash.

        Raises:
            DuplicateError: If the username is taken
            PersistenceError: On other database errors
        """
        password_hash = hash_password(data.password, self.bcrypt_rounds)
        user = self.create(data, password_hash=password_hash)
        logger.info("Created user %s (id=%s)", user.username, user.user_id)
        return user

    def authenticate(self, username: str, password: str) -> UserModel | None:
        """Return the user whose username and password both match, else None."""
        db_user = self._fetch_by_username(username)
        if db_user is None or not verify_password(password, db_user.password_hash):
            return None
        return self._to_response_model(db_user)

    def update_password(self, user_id: int, password: str) -> bool:
        """
        Replace a user's password, archiving the previous hash.

        Returns:
            False if the user does not exist
        """
        db_user = self._fetch(user_id)
        if db_user is None:
            return False

        self.session.add(
            UserPasswordHistory(user_id=user_id, password_hash=db_user.password_hash)
        )
        db_user.password_hash = hash_password(password, self.bcrypt_rounds)
        safe_commit(self.session, "update password")
        logger.info("Password updated for user %s", user_id)
        return True

    def username_exists(self, username: str) -> bool:
        query = select(func.count()).select_from(UserDB).where(UserDB.username == username)
        count = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check username"
        )
        return bool(count)

    def is_password_used_by_user(self, user_id: int, password: str) -> bool:
        """True if ``password`` matches the user's current or any earlier password."""
        db_user = self._fetch(user_id)
        if db_user is None:
            return False

        history_query = select(UserPasswordHistory.password_hash).where(
            UserPasswordHistory.user_id == user_id
        )
        previous = safe_query(
            self.session,
            lambda s: s.execute(history_query).scalars().all(),
            "Failed to get password history",
        )
        return any(
            verify_password(password, password_hash)
            for password_hash in [db_user.password_hash, *previous]
        )

    def get_all_summaries(self) -> list[UserSummary]:
        """All users, ordered by username."""
        query = select(
            UserDB.user_id, UserDB.username, UserDB.role, UserDB.is_active
        ).order_by(UserDB.username)
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list users"
        )
        return [UserSummary.model_validate(dict(row._mapping)) for row in rows]
