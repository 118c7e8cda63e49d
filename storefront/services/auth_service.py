import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.exceptions import Conflict, Unauthorized
from storefront.core.security import PasswordHasher
from storefront.db.session import transaction
from storefront.models import Role, User
from storefront.schemas.auth import LoginIn, RegisterIn

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def register_user(db: Session, data: RegisterIn, hasher: PasswordHasher) -> User:
    if db.scalar(select(User).where(User.email == data.email)):
        raise Conflict("Email already registered")
    if data.cpf and db.scalar(select(User).where(User.cpf == data.cpf)):
        raise Conflict("CPF already registered")

    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=hasher.hash(data.password),
        cpf=data.cpf,
        phone=data.phone,
        role=Role.USER,
    )
    with transaction(db):
        db.add(user)
    db.refresh(user)
    logger.info(f"User {user.id} registered")
    return user


def login_user(db: Session, data: LoginIn, hasher: PasswordHasher) -> User:
    # same message for unknown email and wrong password
    user = db.scalar(select(User).where(User.email == data.email))
    if not user or not hasher.verify(data.password, user.password):
        raise Unauthorized(INVALID_CREDENTIALS)
    return user
