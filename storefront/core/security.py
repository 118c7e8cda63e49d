from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.core.config import Settings
from storefront.core.exceptions import Unauthorized


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.pwd_ctx.hash(password)

    def verify(self, plain: str, hashed: str) -> bool:
        return self.pwd_ctx.verify(plain, hashed)


class TokenIssuer:
    """Signs and checks the stateless session tokens.

    The token only carries the user id (``sub``); the role is looked up
    again on every request so a demoted admin loses access immediately.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def create_token(self, user_id: int, expires_minutes: Optional[int] = None) -> str:
        expires = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or self.expires_minutes)
        to_encode = {"sub": str(user_id), "exp": expires}
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthorized("Invalid or expired token")
        sub = payload.get("sub")
        if sub is None or not str(sub).isdigit():
            raise Unauthorized("Invalid token: user id not found")
        return int(sub)


def hasher_from_settings(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def issuer_from_settings(settings: Settings) -> TokenIssuer:
    return TokenIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
