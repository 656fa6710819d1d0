"""SQLAlchemy implementation of the note repository.

This module contains the concrete implementation of the NoteRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from domain.entities.checklist import ChecklistItem
from domain.entities.common import as_naive_utc
from domain.entities.note import Note, NoteImage
from domain.repositories.note_repository import NoteRepository
from infrastructure.models.associations import note_tags
from infrastructure.models.checklist_orm import NoteChecklistItemORM
from infrastructure.models.note_image_orm import NoteImageORM
from infrastructure.models.note_orm import NoteORM
from infrastructure.models.note_share_orm import SharedNoteORM  # noqa: F401
from infrastructure.models.tag_orm import TagORM
from infrastructure.repositories.checklist_mapping import item_to_entity, items_to_entities
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyNoteRepository(NoteRepository):
    """SQLAlchemy implementation of the note repository.

    This class provides concrete implementation for note operations
    using SQLAlchemy ORM against the backend's Postgres database.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.
    """

    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Create a new note in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note, re-read from storage
        """
        try:
            db_note = NoteORM(
                id=note.id,
                title=note.title,
                content=note.content,
                cover_image_url=note.cover_image_url,
                user_id=note.owner_id,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )

            for item in note.checklist:
                db_note.checklist_items.append(
                    NoteChecklistItemORM(
                        id=item.id,
                        title=item.title,
                        completed=item.completed,
                        order_index=item.order_index,
                        created_at=item.created_at,
                    )
                )

            # Only link existing tags, never create new ones
            for tag in note.tags:
                tag_orm = db_session.query(TagORM).filter(TagORM.id == tag.id).first()
                if tag_orm:
                    db_note.tags.append(tag_orm)

            db_session.add(db_note)
            db_session.commit()
            db_session.refresh(db_note)

            return self._orm_to_domain_entity(db_note)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create note: {str(e)}")
            raise

    async def get_note(self, db_session: Session, note_id: UUID) -> Optional[Note]:
        """Get a note by ID.

        Args:
            db_session (Session): Database session.
            note_id (UUID): The ID of the note to retrieve.

        Returns:
            Optional[Note]: The note if found, None otherwise.
        """
        try:
            note_orm = db_session.query(NoteORM).filter(NoteORM.id == note_id).first()
            if not note_orm:
                logger.info(f"Note {note_id} not found")
                return None

            return self._orm_to_domain_entity(note_orm)

        except Exception as e:
            logger.error(f"Failed to get note {note_id}: {str(e)}")
            raise

    async def list_notes_by_owner(
        self, db_session: Session, owner_id: UUID
    ) -> List[Note]:
        try:
            notes = (
                db_session.query(NoteORM)
                .filter(NoteORM.user_id == owner_id)
                .order_by(NoteORM.updated_at.desc())
                .all()
            )
            logger.info(f"Found {len(notes)} notes for user {owner_id}")
            return [self._orm_to_domain_entity(note) for note in notes]

        except Exception as e:
            logger.error(f"Failed to list notes of user {owner_id}: {str(e)}")
            raise

    async def list_notes_by_ids(
        self, db_session: Session, note_ids: Iterable[UUID]
    ) -> List[Note]:
        ids = list(note_ids)
        if not ids:
            return []

        try:
            notes = (
                db_session.query(NoteORM)
                .filter(NoteORM.id.in_(ids))
                .order_by(NoteORM.updated_at.desc())
                .all()
            )
            return [self._orm_to_domain_entity(note) for note in notes]

        except Exception as e:
            logger.error(f"Failed to list notes by ids: {str(e)}")
            raise

    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Update an existing note in the repository.

        Args:
            db_session (Session): Database session.
            note (Note): The note entity with updated data.

        Returns:
            Note: The updated note entity.

        Raises:
            ValueError: If the note is not found.
        """
        try:
            db_note = db_session.query(NoteORM).filter(NoteORM.id == note.id).first()
            if not db_note:
                logger.warning(f"Note {note.id} not found for update")
                raise ValueError(f"Note {note.id} not found")

            db_note.title = note.title
            db_note.content = note.content
            db_note.cover_image_url = note.cover_image_url
            db_note.updated_at = note.updated_at

            db_session.commit()
            db_session.refresh(db_note)

            return self._orm_to_domain_entity(db_note)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update note {note.id}: {str(e)}")
            raise

    async def delete_note(self, db_session: Session, note_id: UUID) -> bool:
        """Delete a note; images, checklist, tag links and shares go with it.

        Returns:
            bool: True if the note was deleted, False if not found.
        """
        try:
            db_note = db_session.query(NoteORM).filter(NoteORM.id == note_id).first()
            if not db_note:
                return False

            db_session.delete(db_note)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete note {note_id}: {str(e)}")
            raise

    async def add_image(self, db_session: Session, image: NoteImage) -> NoteImage:
        try:
            db_image = NoteImageORM(
                id=image.id,
                note_id=image.note_id,
                image_url=image.image_url,
                order_index=image.order_index,
                created_at=image.created_at,
            )
            db_session.add(db_image)
            db_session.commit()
            db_session.refresh(db_image)
            return self._image_to_entity(db_image)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to add image to note {image.note_id}: {str(e)}")
            raise

    async def delete_image(
        self, db_session: Session, note_id: UUID, image_id: UUID
    ) -> bool:
        try:
            db_image = (
                db_session.query(NoteImageORM)
                .filter(NoteImageORM.id == image_id, NoteImageORM.note_id == note_id)
                .first()
            )
            if not db_image:
                return False

            db_session.delete(db_image)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete image {image_id}: {str(e)}")
            raise

    async def add_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        try:
            db_item = NoteChecklistItemORM(
                id=item.id,
                note_id=item.parent_id,
                title=item.title,
                completed=item.completed,
                order_index=item.order_index,
                created_at=item.created_at,
            )
            db_session.add(db_item)
            db_session.commit()
            db_session.refresh(db_item)
            return item_to_entity(db_item)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to add checklist item to note {item.parent_id}: {str(e)}")
            raise

    async def update_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        try:
            db_item = (
                db_session.query(NoteChecklistItemORM)
                .filter(NoteChecklistItemORM.id == item.id)
                .first()
            )
            if not db_item:
                raise ValueError(f"Checklist item {item.id} not found")

            db_item.completed = item.completed
            db_session.commit()
            db_session.refresh(db_item)
            return item_to_entity(db_item)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update checklist item {item.id}: {str(e)}")
            raise

    async def delete_checklist_item(
        self, db_session: Session, note_id: UUID, item_id: UUID
    ) -> bool:
        try:
            db_item = (
                db_session.query(NoteChecklistItemORM)
                .filter(
                    NoteChecklistItemORM.id == item_id,
                    NoteChecklistItemORM.note_id == note_id,
                )
                .first()
            )
            if not db_item:
                return False

            db_session.delete(db_item)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete checklist item {item_id}: {str(e)}")
            raise

    async def replace_tags(
        self, db_session: Session, note_id: UUID, tag_ids: List[UUID]
    ) -> None:
        try:
            db_session.execute(note_tags.delete().where(note_tags.c.note_id == note_id))
            for tag_id in tag_ids:
                db_session.execute(
                    note_tags.insert().values(note_id=note_id, tag_id=tag_id)
                )
            db_session.commit()
            # Cached tag collections are stale after the raw statements above
            db_session.expire_all()

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to replace tags of note {note_id}: {str(e)}")
            raise

    @staticmethod
    def _image_to_entity(image_orm: NoteImageORM) -> NoteImage:
        return NoteImage(
            id=image_orm.id,
            note_id=image_orm.note_id,
            image_url=image_orm.image_url,
            order_index=image_orm.order_index,
            created_at=as_naive_utc(image_orm.created_at),
        )

    def _orm_to_domain_entity(self, note_orm: NoteORM) -> Note:
        """Convert SQLAlchemy ORM object to domain entity."""
        images = sorted(
            (self._image_to_entity(image) for image in note_orm.images),
            key=lambda image: (image.order_index, image.created_at),
        )

        return Note(
            id=note_orm.id,
            title=note_orm.title,
            content=note_orm.content,
            owner_id=note_orm.user_id,
            cover_image_url=note_orm.cover_image_url,
            created_at=as_naive_utc(note_orm.created_at),
            updated_at=as_naive_utc(note_orm.updated_at),
            tags=[SqlAlchemyTagRepository.model_to_entity(tag) for tag in note_orm.tags],
            images=images,
            checklist=items_to_entities(note_orm.checklist_items),
        )
