from pydantic import BaseModel, Field

from shortlyx.features.users.schemas import UserOut

# ---------- Inputs ----------

class SignUpIn(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)

class SignInIn(BaseModel):
    username: str
    password: str


# ---------- Outputs ----------

class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

class AuthStatusOut(BaseModel):
    authenticated: bool
    user: UserOut | None = None
