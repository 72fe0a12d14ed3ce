"""Pydantic models for API request/response.

JSON bodies use camelCase keys (``customerNumber``, ``emailAddress``...),
matching the payloads existing clients already send.
"""

from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.user import AuthResult, Login, User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRequest(CamelModel):
    """Request body for create and update.

    ``password`` is plaintext on create. On update it is stored as sent.
    ``id`` is accepted for compatibility but ignored; the path decides.
    """
    id: Optional[str] = None
    customer_number: int = 0
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[int] = Field(None, ge=-32768, le=32767)
    city: Optional[str] = None
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None

    def to_domain(self) -> User:
        return User(**self.model_dump(by_alias=False))


class UserResponse(CamelModel):
    """Stored user. ``password`` carries the hash, never plaintext."""
    id: str
    customer_number: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[int] = None
    city: Optional[str] = None
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_domain(cls, user: User) -> 'UserResponse':
        return cls(**asdict(user))


class LoginRequest(CamelModel):
    email_address: Optional[str] = None
    password: Optional[str] = None

    def to_domain(self) -> Login:
        return Login(email_address=self.email_address, password=self.password)


class AuthResponse(BaseModel):
    matched: bool
    id: str = Field("", description="User ID when matched, empty otherwise")

    @classmethod
    def from_domain(cls, result: AuthResult) -> 'AuthResponse':
        return cls(matched=result.matched, id=result.id)


class VersionResponse(BaseModel):
    service: str
    version: str
    hosted_at_address: str = Field(..., serialization_alias="hosted-at-address")
