"""
Contact service: owner-scoped CRUD for recruiter / referral contacts.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import Pagination
from jobtrack.db.models.contact import Contact
from jobtrack.services import store

logger = logging.getLogger(__name__)

RESOURCE = "Contact"
OPTIONAL_FIELDS = ("email", "phone", "linkedin")


def list_contacts(db: Session, owner: Owner, pagination: Pagination) -> Tuple[List[Contact], int]:
    return store.list_owned(db, Contact, owner, pagination)


def get_contact(db: Session, owner: Owner, contact_id: int) -> Contact:
    return store.get_owned(db, Contact, owner, contact_id, RESOURCE)


def create_contact(db: Session, owner: Owner, fields: Dict[str, Any]) -> Contact:
    name = store.require_text(fields.get("name"), "name", "Contact name")
    contact = Contact(
        owner_id=owner,
        name=name,
        **{field: store.optional_text(fields.get(field)) for field in OPTIONAL_FIELDS},
    )
    store.save(db, contact, RESOURCE)
    logger.info(f"Contact created: contact_id={contact.id}, owner={owner}")
    return contact


def update_contact(db: Session, owner: Owner, contact_id: int, fields: Dict[str, Any]) -> Contact:
    name: Optional[str] = None
    if "name" in fields:
        name = store.require_text(fields["name"], "name", "Contact name")

    contact = get_contact(db, owner, contact_id)
    if name is not None:
        contact.name = name
    for field in OPTIONAL_FIELDS:
        if field in fields:
            setattr(contact, field, store.optional_text(fields[field]))

    store.save(db, contact, RESOURCE)
    logger.info(f"Contact updated: contact_id={contact.id}, owner={owner}")
    return contact


def delete_contact(db: Session, owner: Owner, contact_id: int) -> None:
    """Applications pointing at the contact keep existing with contact_id NULL."""
    store.delete_owned(db, Contact, owner, contact_id, RESOURCE)
