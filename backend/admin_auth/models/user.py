# admin_auth/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, func

from admin_auth.core.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(100), nullable=False, server_default="")
    last_name = Column(String(100), nullable=False, server_default="")
    email = Column(String(255), unique=True, index=True, nullable=False)
    # bcrypt digest; never the plaintext and never serialised back to clients.
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
