"""SQLAlchemy implementation of the share repository.

Shares are matched to recipients by user id or by normalized email, the
same two predicates the backend's access policies use.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set
from uuid import UUID

from domain.entities.common import as_naive_utc
from domain.entities.share import NoteShare
from domain.repositories.share_repository import ShareRepository
from domain.services.share_service import DuplicateShareError
from infrastructure.models.note_share_orm import SharedNoteORM
from infrastructure.repositories.errors import is_unique_violation
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyShareRepository(ShareRepository):
    """SQLAlchemy implementation of the share repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session.
    """

    async def create_shares(
        self, db_session: Session, shares: List[NoteShare]
    ) -> List[NoteShare]:
        """Insert shares in one commit.

        Raises:
            DuplicateShareError: If a (note, email) pair already exists
        """
        try:
            db_shares = [
                SharedNoteORM(
                    id=share.id,
                    note_id=share.note_id,
                    owner_id=share.owner_id,
                    shared_with_email=share.shared_with_email,
                    shared_with_user_id=share.shared_with_user_id,
                    can_edit=share.can_edit,
                    created_at=share.created_at,
                )
                for share in shares
            ]
            db_session.add_all(db_shares)
            db_session.commit()
            for db_share in db_shares:
                db_session.refresh(db_share)
            return [self._orm_to_domain_entity(db_share) for db_share in db_shares]

        except IntegrityError as e:
            db_session.rollback()
            if is_unique_violation(e):
                raise DuplicateShareError() from e
            logger.error(f"Failed to create shares: {str(e)}")
            raise

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create shares: {str(e)}")
            raise

    async def get_share(self, db_session: Session, share_id: UUID) -> Optional[NoteShare]:
        db_share = (
            db_session.query(SharedNoteORM).filter(SharedNoteORM.id == share_id).first()
        )
        return self._orm_to_domain_entity(db_share) if db_share else None

    async def list_for_note(self, db_session: Session, note_id: UUID) -> List[NoteShare]:
        db_shares = (
            db_session.query(SharedNoteORM)
            .filter(SharedNoteORM.note_id == note_id)
            .order_by(SharedNoteORM.created_at.asc())
            .all()
        )
        return [self._orm_to_domain_entity(db_share) for db_share in db_shares]

    async def find_for_recipient(
        self, db_session: Session, note_id: UUID, user_id: UUID, email: Optional[str]
    ) -> Optional[NoteShare]:
        db_share = (
            db_session.query(SharedNoteORM)
            .filter(
                SharedNoteORM.note_id == note_id,
                self._recipient_filter(user_id, email),
            )
            .order_by(SharedNoteORM.can_edit.desc())
            .first()
        )
        return self._orm_to_domain_entity(db_share) if db_share else None

    async def list_received(
        self, db_session: Session, user_id: UUID, email: Optional[str]
    ) -> List[NoteShare]:
        try:
            db_shares = (
                db_session.query(SharedNoteORM)
                .filter(self._recipient_filter(user_id, email))
                .all()
            )
            return [self._orm_to_domain_entity(db_share) for db_share in db_shares]

        except Exception as e:
            logger.error(f"Failed to list shares received by {user_id}: {str(e)}")
            raise

    async def shared_note_ids(self, db_session: Session, owner_id: UUID) -> Set[UUID]:
        rows = (
            db_session.query(SharedNoteORM.note_id)
            .filter(SharedNoteORM.owner_id == owner_id)
            .distinct()
            .all()
        )
        return {row.note_id for row in rows}

    async def delete_share(self, db_session: Session, share_id: UUID) -> bool:
        try:
            db_share = (
                db_session.query(SharedNoteORM)
                .filter(SharedNoteORM.id == share_id)
                .first()
            )
            if not db_share:
                return False

            db_session.delete(db_share)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete share {share_id}: {str(e)}")
            raise

    @staticmethod
    def _recipient_filter(user_id: UUID, email: Optional[str]):
        conditions = [SharedNoteORM.shared_with_user_id == user_id]
        if email:
            conditions.append(SharedNoteORM.shared_with_email == email.strip().lower())
        return or_(*conditions)

    @staticmethod
    def _orm_to_domain_entity(share_orm: SharedNoteORM) -> NoteShare:
        return NoteShare(
            id=share_orm.id,
            note_id=share_orm.note_id,
            owner_id=share_orm.owner_id,
            shared_with_email=share_orm.shared_with_email,
            shared_with_user_id=share_orm.shared_with_user_id,
            can_edit=bool(share_orm.can_edit),
            created_at=as_naive_utc(share_orm.created_at),
        )
