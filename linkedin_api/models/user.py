"""
User data models and schemas
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ExperienceEntry(BaseModel):
    """A position listed on a profile"""
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)


class EducationEntry(BaseModel):
    """A school listed on a profile"""
    school: str = Field(..., min_length=1, max_length=200)
    field_of_study: Optional[str] = Field(None, max_length=200)
    start_year: Optional[int] = Field(None, ge=1900, le=2100)
    end_year: Optional[int] = Field(None, ge=1900, le=2100)


class SignupRequest(BaseModel):
    """Schema for creating a new account"""
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if any(ch.isspace() for ch in v):
            raise ValueError("Username cannot contain whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class LoginRequest(BaseModel):
    """Schema for username/password login"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Schema for updating profile fields; unset fields are left untouched"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    headline: Optional[str] = Field(None, max_length=220)
    about: Optional[str] = Field(None, max_length=2600)
    location: Optional[str] = Field(None, max_length=100)
    profile_picture: Optional[str] = None
    banner_img: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if any(ch.isspace() for ch in v):
            raise ValueError("Username cannot contain whitespace")
        return v
