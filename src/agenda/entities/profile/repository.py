from sqlmodel import Session, select

from .entity import Profile
from .table import ProfileTable


class ProfileRepository:
    """Data-access layer for profiles."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_user(self, user_id: str) -> Profile | None:
        statement = select(ProfileTable).where(ProfileTable.user_id == user_id).limit(1)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Profile.model_validate(row, from_attributes=True)

    def get_full_name(self, user_id: str) -> str | None:
        profile = self.get_by_user(user_id)
        return profile.full_name if profile else None

    def create(self, profile: Profile) -> Profile:
        row = ProfileTable.model_validate(profile.model_dump())
        self._session.add(row)
        self._session.flush()
        return Profile.model_validate(row, from_attributes=True)
