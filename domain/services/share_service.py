"""Share domain service for the NotyApp service.

This module contains the ShareService that shares notes with other users
by email, lists shared notes, and creates notes that are shared from the
start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
from uuid import UUID

from domain.entities.listing import ListCriteria
from domain.entities.note import Note
from domain.entities.share import NoteShare, normalize_email
from domain.services.note_service import NoteAccessDeniedError, NoteNotFoundError

if TYPE_CHECKING:
    from domain.entities.user import AuthenticatedUser
    from domain.repositories.note_repository import NoteRepository
    from domain.repositories.profile_repository import ProfileRepository
    from domain.repositories.share_repository import ShareRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

DUPLICATE_SHARE_MESSAGE = "This note is already shared with that user"


class ShareError(Exception):
    """Base exception for share-related errors."""

    pass


class ShareNotFoundError(ShareError):
    """Exception raised when a share does not exist for the given note."""

    pass


class DuplicateShareError(ShareError):
    """Exception raised when a note is already shared with the same email."""

    def __init__(self, message: str = DUPLICATE_SHARE_MESSAGE):
        super().__init__(message)


@dataclass
class ShareRecipient:
    """Recipient picked when creating a shared note.

    Attributes:
        email (str): Recipient email address.
        user_id (Optional[UUID]): Profile id, when picked from the user search.
    """

    email: str
    user_id: Optional[UUID] = None


class ShareService:
    """Domain service for sharing notes between users.

    Only the owner of a note may share it, list its shares or revoke them.
    """

    def __init__(
        self,
        note_repository: "NoteRepository",
        share_repository: "ShareRepository",
        profile_repository: "ProfileRepository",
    ):
        self._note_repository = note_repository
        self._share_repository = share_repository
        self._profile_repository = profile_repository

    async def list_shared_notes(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        criteria: Optional[ListCriteria] = None,
    ) -> List[Note]:
        """List notes shared with the user plus notes the user has shared.

        Received shares are matched by recipient email or user id. Each note
        appears once, most recently updated first.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            criteria: Optional in-process title filter

        Returns:
            List[Note]: The merged, de-duplicated notes
        """
        received = await self._share_repository.list_received(
            db_session, user.id, user.normalized_email
        )
        owned_shared_ids = await self._share_repository.shared_note_ids(
            db_session, user.id
        )

        note_ids = set(owned_shared_ids)
        note_ids.update(share.note_id for share in received)
        logger.info(
            f"User {user.id} has {len(received)} received shares and "
            f"{len(owned_shared_ids)} shared notes"
        )

        notes = await self._note_repository.list_notes_by_ids(db_session, note_ids)
        unique: Dict[UUID, Note] = {}
        for note in notes:
            unique.setdefault(note.id, note)
        merged = sorted(unique.values(), key=lambda note: note.updated_at, reverse=True)

        return (criteria or ListCriteria()).apply(merged)

    async def share_note(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        email: str,
    ) -> NoteShare:
        """Share one of the user's notes with another user by email.

        The recipient profile is looked up by email; when none exists the
        share is stored with the email only.

        Raises:
            ValueError: If the email is invalid or belongs to the user
            NoteNotFoundError: If the note does not exist
            NoteAccessDeniedError: If the user does not own the note
            DuplicateShareError: If the note is already shared with that email
        """
        await self._get_owned_note(db_session, user, note_id)

        recipient_email = normalize_email(email)
        profile = await self._profile_repository.get_by_email(db_session, recipient_email)
        self._reject_self_share(user, recipient_email, profile.id if profile else None)

        share = NoteShare.create_new(
            note_id=note_id,
            owner_id=user.id,
            shared_with_email=recipient_email,
            shared_with_user_id=profile.id if profile else None,
        )
        try:
            created = await self._share_repository.create_shares(db_session, [share])
        except DuplicateShareError:
            logger.warning(f"Note {note_id} already shared with {recipient_email}")
            raise

        logger.info(f"Shared note {note_id} with {recipient_email}")
        return created[0]

    async def list_shares(
        self, db_session: "Session", user: "AuthenticatedUser", note_id: UUID
    ) -> List[NoteShare]:
        await self._get_owned_note(db_session, user, note_id)
        return await self._share_repository.list_for_note(db_session, note_id)

    async def delete_share(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        share_id: UUID,
    ) -> None:
        """Revoke a share of one of the user's notes.

        Raises:
            ShareNotFoundError: If the share does not belong to the note
        """
        await self._get_owned_note(db_session, user, note_id)

        share = await self._share_repository.get_share(db_session, share_id)
        if not share or share.note_id != note_id:
            raise ShareNotFoundError(f"Share {share_id} not found")

        await self._share_repository.delete_share(db_session, share_id)
        logger.info(f"Revoked share {share_id} of note {note_id}")

    async def create_shared_note(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        title: str,
        content: Optional[str],
        recipients: List[ShareRecipient],
        cover_image_url: Optional[str] = None,
    ) -> Tuple[Note, List[NoteShare]]:
        """Create a note and share it with every recipient.

        The note is committed first, then the shares in a second commit; a
        failure while sharing leaves the note in place.

        Raises:
            ValueError: If there is no recipient or an email is invalid
            DuplicateShareError: If storing a share hits the unique constraint
        """
        if not recipients:
            raise ValueError("At least one recipient is required")

        normalized = {}
        for recipient in recipients:
            email = normalize_email(recipient.email)
            self._reject_self_share(user, email, recipient.user_id)
            # First entry wins when an email is listed twice
            normalized.setdefault(
                email, ShareRecipient(email=email, user_id=recipient.user_id)
            )

        note = Note.create_new(
            title=title,
            content=content,
            owner_id=user.id,
            cover_image_url=cover_image_url,
        )
        created_note = await self._note_repository.create_note(db_session, note)

        shares = []
        for recipient in normalized.values():
            user_id = recipient.user_id
            if user_id is None:
                profile = await self._profile_repository.get_by_email(
                    db_session, recipient.email
                )
                user_id = profile.id if profile else None
            shares.append(
                NoteShare.create_new(
                    note_id=created_note.id,
                    owner_id=user.id,
                    shared_with_email=recipient.email,
                    shared_with_user_id=user_id,
                )
            )

        created_shares = await self._share_repository.create_shares(db_session, shares)
        logger.info(
            f"Created shared note {created_note.id} with {len(created_shares)} recipients"
        )
        return created_note, created_shares

    async def _get_owned_note(
        self, db_session: "Session", user: "AuthenticatedUser", note_id: UUID
    ) -> Note:
        note = await self._note_repository.get_note(db_session, note_id)
        if not note:
            raise NoteNotFoundError(f"Note {note_id} not found")
        if not note.is_owned_by(user.id):
            raise NoteAccessDeniedError("Only the owner can manage shares of this note")
        return note

    @staticmethod
    def _reject_self_share(
        user: "AuthenticatedUser", email: str, recipient_id: Optional[UUID]
    ) -> None:
        if recipient_id == user.id or (user.normalized_email and email == user.normalized_email):
            raise ValueError("You cannot share a note with yourself")
