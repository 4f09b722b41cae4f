"""
User model - owner of test results
"""
from sqlalchemy import Column, Integer, String, TIMESTAMP, func
from assessment.database import Base


class User(Base):
    """
    Users table - identities are issued by the auth collaborator,
    this table only anchors result ownership
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    created_at = Column(TIMESTAMP, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
        }

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
