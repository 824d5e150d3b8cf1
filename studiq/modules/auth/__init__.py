from .users import USER_STORAGE_KEY, AuthService, User

__all__ = [
    "USER_STORAGE_KEY",
    "AuthService",
    "User",
]
