"""
User model for authentication.

Users are identified by username; the is_admin flag is copied into every
token the user is issued.
"""

from sqlalchemy import Column, String, Text, Boolean, CheckConstraint, false
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, CheckConstraint("email LIKE '%@%'"), nullable=False)

    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
