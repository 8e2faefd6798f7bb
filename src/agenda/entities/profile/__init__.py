from .entity import Profile
from .repository import ProfileRepository
from .table import ProfileTable

__all__ = ["Profile", "ProfileRepository", "ProfileTable"]
