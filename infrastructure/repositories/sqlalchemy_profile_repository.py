"""SQLAlchemy implementation of the profile repository."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.common import as_naive_utc
from domain.entities.profile import Profile
from domain.repositories.profile_repository import ProfileRepository
from infrastructure.models.profile_orm import ProfileORM
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyProfileRepository(ProfileRepository):
    """SQLAlchemy implementation of the profile repository."""

    async def get_by_id(self, db_session: Session, user_id: UUID) -> Optional[Profile]:
        db_profile = db_session.query(ProfileORM).filter(ProfileORM.id == user_id).first()
        return self._orm_to_domain_entity(db_profile) if db_profile else None

    async def get_by_email(self, db_session: Session, email: str) -> Optional[Profile]:
        db_profile = (
            db_session.query(ProfileORM)
            .filter(func.lower(ProfileORM.email) == email.strip().lower())
            .first()
        )
        return self._orm_to_domain_entity(db_profile) if db_profile else None

    async def update(self, db_session: Session, profile: Profile) -> Profile:
        try:
            db_profile = (
                db_session.query(ProfileORM).filter(ProfileORM.id == profile.id).first()
            )
            if not db_profile:
                raise ValueError(f"Profile {profile.id} not found")

            db_profile.full_name = profile.full_name
            db_profile.avatar_url = profile.avatar_url
            db_profile.updated_at = profile.updated_at

            db_session.commit()
            db_session.refresh(db_profile)
            return self._orm_to_domain_entity(db_profile)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update profile {profile.id}: {str(e)}")
            raise

    async def search(
        self, db_session: Session, query: str, exclude_user_id: UUID, limit: int
    ) -> List[Profile]:
        pattern = f"%{query}%"
        db_profiles = (
            db_session.query(ProfileORM)
            .filter(
                or_(ProfileORM.email.ilike(pattern), ProfileORM.full_name.ilike(pattern)),
                ProfileORM.id != exclude_user_id,
            )
            .order_by(ProfileORM.email.asc())
            .limit(limit)
            .all()
        )
        return [self._orm_to_domain_entity(db_profile) for db_profile in db_profiles]

    @staticmethod
    def _orm_to_domain_entity(profile_orm: ProfileORM) -> Profile:
        return Profile(
            id=profile_orm.id,
            email=profile_orm.email,
            full_name=profile_orm.full_name,
            avatar_url=profile_orm.avatar_url,
            created_at=as_naive_utc(profile_orm.created_at),
            updated_at=as_naive_utc(profile_orm.updated_at),
        )
