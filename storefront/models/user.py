import enum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from storefront.db.session import Base


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never the plaintext
    cpf = Column(String(14), unique=True, nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.USER)

    orders = relationship("Order", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
