# app/models/bar.py
"""
Bars table.
One row per tracked venue; current_count is overwritten by manager updates.
"""

from sqlalchemy import Column, Integer, String
from app.database import Base


class Bar(Base):
    __tablename__ = "bars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    current_count = Column(Integer, default=0, nullable=False)
    capacity = Column(Integer, nullable=False)
    address = Column(String(300), nullable=False)
    latitude = Column(String(32), nullable=False)    # decimal string, kept verbatim
    longitude = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<Bar {self.id} {self.name} count={self.current_count}/{self.capacity}>"
