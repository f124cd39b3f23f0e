from pydantic import EmailStr, Field
from datetime import datetime

from eca_admin.models.enum import UserRole
from eca_admin.schemas.base import BaseSchema


class UserBase(BaseSchema):
    """Base user schema"""

    email: EmailStr | None = Field(None, description="Email address (required for staff)")
    name: str | None = Field(None, max_length=200, description="Display name")
    first_name: str | None = Field(None, max_length=100, description="First name")
    last_name: str | None = Field(None, max_length=100, description="Last name")
    home_phone: str | None = Field(None, max_length=30)
    cell_phone: str | None = Field(None, max_length=30)
    notes: str | None = Field(None, max_length=2000)


class UserCreate(UserBase):
    """Schema used to create a user"""

    role: UserRole = Field(default=UserRole.USER, description="Account role")

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "jeanne.martin@example.org",
                "name": "Jeanne Martin",
                "firstName": "Jeanne",
                "lastName": "Martin",
                "role": "admin",
            }
        }
    }


class UserUpdate(UserBase):
    """Schema used to update a user"""

    role: UserRole | None = None
    is_active: bool | None = None


class UserOut(BaseSchema):
    """User returned by the API (never the password)"""

    id: int
    email: str | None
    name: str | None
    first_name: str | None
    last_name: str | None
    role: UserRole
    is_active: bool
    password_needs_change: bool
    home_phone: str | None = None
    cell_phone: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserCreated(UserOut):
    """Created user, with the temporary password of staff accounts"""

    temporary_password: str | None = None


class UserLogin(BaseSchema):
    """Login payload"""

    email: str = Field(..., description="Email")
    password: str = Field(..., description="Password")

    model_config = {
        "json_schema_extra": {
            "example": {"email": "admin@example.org", "password": "SecurePass123"}
        }
    }


class Token(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    password_needs_change: bool = False


class PasswordChange(BaseSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=72)
