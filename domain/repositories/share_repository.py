"""Share repository interface for the NotyApp service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Set
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.share import NoteShare
    from sqlalchemy.orm import Session


class ShareRepository(ABC):
    """Abstract repository interface for note shares.

    Shares are unique per (note, recipient email). Implementations must
    report a violation of that constraint as ``DuplicateShareError``.
    """

    @abstractmethod
    async def create_shares(
        self, db_session: Session, shares: List[NoteShare]
    ) -> List[NoteShare]:
        """Insert one or more shares in a single commit.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            shares (List[NoteShare]): Shares to insert

        Returns:
            List[NoteShare]: The stored shares

        Raises:
            DuplicateShareError: If a share for the same note and email exists
        """
        pass

    @abstractmethod
    async def get_share(self, db_session: Session, share_id: UUID) -> Optional[NoteShare]:
        pass

    @abstractmethod
    async def list_for_note(self, db_session: Session, note_id: UUID) -> List[NoteShare]:
        """List the shares of a note, oldest first."""
        pass

    @abstractmethod
    async def find_for_recipient(
        self, db_session: Session, note_id: UUID, user_id: UUID, email: Optional[str]
    ) -> Optional[NoteShare]:
        """Find the share of a note addressed to a user, by id or by email."""
        pass

    @abstractmethod
    async def list_received(
        self, db_session: Session, user_id: UUID, email: Optional[str]
    ) -> List[NoteShare]:
        """List the shares addressed to a user, by id or by email."""
        pass

    @abstractmethod
    async def shared_note_ids(self, db_session: Session, owner_id: UUID) -> Set[UUID]:
        """Return the ids of the notes a user owns and has shared."""
        pass

    @abstractmethod
    async def delete_share(self, db_session: Session, share_id: UUID) -> bool:
        pass
