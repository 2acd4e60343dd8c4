from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_current_owner, get_db
from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import parse_pagination
from jobtrack.schemas.contact import (
    ContactCreate,
    ContactUpdate,
    ContactResponse,
    ContactListResponse,
)
from jobtrack.services import contact_service

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.get("", response_model=ContactListResponse)
def list_contacts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    pagination = parse_pagination(page, limit)
    contacts, total = contact_service.list_contacts(db, owner, pagination)
    return ContactListResponse(
        data=[ContactResponse.model_validate(contact) for contact in contacts],
        meta=pagination.meta(total),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ContactResponse)
def create_contact(
    contact_data: ContactCreate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    contact = contact_service.create_contact(db, owner, contact_data.model_dump())
    return ContactResponse.model_validate(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return ContactResponse.model_validate(contact_service.get_contact(db, owner, contact_id))


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    contact_data: ContactUpdate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    contact = contact_service.update_contact(
        db, owner, contact_id, contact_data.model_dump(exclude_unset=True)
    )
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(
    contact_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    contact_service.delete_contact(db, owner, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
