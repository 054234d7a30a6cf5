# app/models/user.py
"""
Users table (bar managers / bouncers).
bar_id points at the bar this user reports for. Not a foreign key: the link is
checked by application logic, same as in the in-memory store.
"""

from sqlalchemy import Column, Integer, String, Boolean
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_bouncer = Column(Boolean, default=True, nullable=False)
    bar_id = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<User {self.username} bar={self.bar_id}>"
