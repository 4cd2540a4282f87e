from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Operator login credentials"""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class OperatorOut(BaseModel):
    email: str
    name: str
    role: str


class LoginResponse(BaseModel):
    """Successful login: operator identity plus session token"""

    success: bool = True
    user: OperatorOut
    token: str
    token_type: str = "bearer"

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "user": {"email": "admin1@event.com", "name": "Admin One", "role": "admin"},
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
            }
        }
    }

