from pydantic import EmailStr, field_validator

from luxe_estate.models.user import UserRole
from luxe_estate.schemas.base import ApiModel
from luxe_estate.schemas.user import UserResponse


class RegisterRequest(ApiModel):
    name: str
    email: EmailStr
    password: str
    # Requesting "agent" files a seller application; the stored role is always "user".
    role: UserRole | None = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(ApiModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class GoogleLoginRequest(ApiModel):
    credential: str


class ProfileUpdate(ApiModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None
    old_password: str | None = None
    receive_push_notifications: bool | None = None


class AuthResponse(UserResponse):
    token: str


class TokenResponse(ApiModel):
    token: str
    token_type: str = "bearer"


def auth_response(user, token: str) -> AuthResponse:
    return AuthResponse(**UserResponse.model_validate(user).model_dump(), token=token)
