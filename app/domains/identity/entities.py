from datetime import datetime
from typing import Optional

from passlib.context import CryptContext

from app.db.base import utcnow

ROLES = ("user", "writer", "admin")
PUBLISHING_ROLES = ("writer", "admin")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User:
    """Identity of a reader, writer or admin"""

    def __init__(
        self,
        id: Optional[int],
        email: str,
        username: str,
        password_hash: str,
        full_name: str = "",
        role: str = "user",
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.username = username
        self.password_hash = password_hash
        self.full_name = full_name
        self.role = role
        self.is_active = is_active
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def can_publish(self) -> bool:
        """Only active writers and admins may post content"""
        return self.is_active and self.role in PUBLISHING_ROLES

    def authenticate(self, password: str) -> bool:
        """Check a plain password against the stored hash"""
        # bcrypt only looks at the first 72 bytes
        return pwd_context.verify(password[:72], self.password_hash)

    @classmethod
    def create_user(
        cls,
        email: str,
        username: str,
        password: str,
        full_name: str = "",
        role: str = "user"
    ) -> "User":
        """Create a new user with a hashed password"""
        return cls(
            id=None,
            email=email.lower(),
            username=username,
            password_hash=pwd_context.hash(password[:72]),
            full_name=full_name,
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
