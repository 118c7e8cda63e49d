from typing import Optional

from pydantic import EmailStr, Field

from storefront.models import Role
from storefront.schemas.common import CamelModel


class RegisterIn(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    cpf: Optional[str] = None
    phone: Optional[str] = None


class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    cpf: Optional[str] = None
    phone: Optional[str] = None
    role: Role


class AuthOut(CamelModel):
    user: UserOut
    token: str
