from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.exceptions import Forbidden, Unauthorized
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.db.session import get_db
from storefront.models import Role, User

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Claims:
    """Who is calling, resolved once per request."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> Claims:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")
    user_id = tokens.decode_token(credentials.credentials)
    # role comes from the store, not from the token
    role = db.scalar(select(User.role).where(User.id == user_id))
    if role is None:
        raise Unauthorized("User not found")
    return Claims(user_id=user_id, role=role)


def require_admin(claims: Claims = Depends(get_current_claims)) -> Claims:
    if not claims.is_admin:
        raise Forbidden("Access denied. Administrator role required.")
    return claims
