from .dto import UserPublicOut, UserRegisterIn
from .service import UserService

__all__ = ["UserPublicOut", "UserRegisterIn", "UserService"]
