from pydantic import BaseModel, EmailStr, Field, validator
from sweetshop.schemas.common import ApiResponse
from sweetshop.models.user import UserRole

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.USER

    @validator("name", pre=True)
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True

class AuthData(BaseModel):
    token: str
    user: UserOut

class AuthResponse(ApiResponse):
    data: AuthData

class UserData(BaseModel):
    user: UserOut

class UserResponse(ApiResponse):
    data: UserData
