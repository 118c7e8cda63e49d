from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_hasher, get_token_issuer
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.db.session import get_db
from storefront.schemas.auth import AuthOut, LoginIn, RegisterIn
from storefront.services import auth_service

router = APIRouter()


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    user = auth_service.register_user(db, payload, hasher)
    return {"user": user, "token": tokens.create_token(user.id)}


@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    user = auth_service.login_user(db, payload, hasher)
    return {"user": user, "token": tokens.create_token(user.id)}
