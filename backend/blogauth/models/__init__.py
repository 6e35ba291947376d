from blogauth.models.refresh_token import RefreshToken
from blogauth.models.user import User

__all__ = [
    "RefreshToken",
    "User",
]
