from typing import Optional, Union
from pydantic import BaseModel, Field

# --- Request bodies ---
# Every field is optional here: missing values are reported by the auth
# service as MISSING_FIELDS inside the envelope. Wrongly typed or malformed
# bodies are turned into the envelope by the validation handler in main.py.

class RegisterIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class VerifyAccountIn(BaseModel):
    otp: Optional[Union[str, int]] = None

class SendResetOtpIn(BaseModel):
    email: Optional[str] = None

class ResetPasswordIn(BaseModel):
    email: Optional[str] = None
    otp: Optional[Union[str, int]] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")

    class Config:
        populate_by_name = True

# --- Responses ---

class Envelope(BaseModel):
    success: bool
    message: str = ""

class UserData(BaseModel):
    name: str
    isAccountVerified: bool

class UserDataEnvelope(Envelope):
    userData: Optional[UserData] = None
