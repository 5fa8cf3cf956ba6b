from myauth.models.user import User

__all__ = ["User"]
