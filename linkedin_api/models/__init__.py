from linkedin_api.models.post import CommentCreate, PostCreate
from linkedin_api.models.social import ConnectionStatus, NotificationType, RequestStatus
from linkedin_api.models.user import (
    EducationEntry, ExperienceEntry, LoginRequest, ProfileUpdate, SignupRequest
)

__all__ = [
    "CommentCreate",
    "ConnectionStatus",
    "EducationEntry",
    "ExperienceEntry",
    "LoginRequest",
    "NotificationType",
    "PostCreate",
    "ProfileUpdate",
    "RequestStatus",
    "SignupRequest",
]
