"""
Company service: owner-scoped CRUD plus get-or-create by normalized name.

Uniqueness is decided by the (owner_id, normalized_name) constraint in the
database, never by an application-level lock. Two concurrent creators of the
same name both end up with the single persisted row.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobtrack.core.errors import (
    COMPANY_NAME_CONSTRAINT,
    Conflict,
    Internal,
    InvalidArgument,
    TrackerError,
    is_unique_violation,
)
from jobtrack.core.normalize import NormalizedName, normalize_name
from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import Pagination
from jobtrack.db.models.company import Company
from jobtrack.services import store

logger = logging.getLogger(__name__)

RESOURCE = "Company"
_NAME_COLUMNS = ("companies.owner_id", "companies.normalized_name")


@dataclass
class CompanyResult:
    """Outcome of get-or-create: the row and whether it was already there."""

    company: Company
    existed: bool


def _normalized(name: Optional[str]) -> NormalizedName:
    if name is None or not isinstance(name, str):
        raise InvalidArgument("Company name is required", field="name")
    normalized = normalize_name(name)
    if not normalized.key:
        raise InvalidArgument("Company name is required", field="name")
    return normalized


def _is_name_conflict(exc: IntegrityError) -> bool:
    return is_unique_violation(exc, COMPANY_NAME_CONSTRAINT, _NAME_COLUMNS)


def find_company_by_name(db: Session, owner: Owner, name: str) -> Optional[Company]:
    """Owner-scoped lookup by comparison key."""
    key = normalize_name(name).key
    with store.reading(db, RESOURCE):
        return (
            db.query(Company)
            .filter(Company.owner_id == owner, Company.normalized_name == key)
            .first()
        )


def list_companies(db: Session, owner: Owner, pagination: Pagination) -> Tuple[List[Company], int]:
    return store.list_owned(db, Company, owner, pagination)


def get_company(db: Session, owner: Owner, company_id: int) -> Company:
    return store.get_owned(db, Company, owner, company_id, RESOURCE)


def get_or_create_company(
    db: Session,
    owner: Owner,
    name: str,
    website: Optional[str] = None,
) -> CompanyResult:
    """
    Return the owner's company with an equivalent name, creating it if needed.

    Args:
        db: Database session
        owner: Authorized owner
        name: Free-text company name
        website: Optional website, only used when a new row is created

    Returns:
        CompanyResult with existed=True when the name was already taken
        (including when a concurrent request won the insert race)

    Raises:
        InvalidArgument: If the name is blank
        Internal: If the insert fails for any reason other than the name constraint
    """
    normalized = _normalized(name)

    existing = find_company_by_name(db, owner, normalized.display)
    if existing is not None:
        logger.debug(f"Company already exists: company_id={existing.id}, owner={owner}")
        return CompanyResult(company=existing, existed=True)

    company = Company(
        owner_id=owner,
        name=normalized.display,
        normalized_name=normalized.key,
        website=store.optional_text(website),
    )
    db.add(company)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _is_name_conflict(e):
            logger.error(f"Failed to create company: {e}", exc_info=True)
            raise Internal("Failed to create company", details=str(e.orig)) from e

        # Another request inserted the same name between our lookup and insert
        winner = find_company_by_name(db, owner, normalized.display)
        if winner is None:
            raise Internal("Failed to create company", details="conflicting row vanished") from e
        logger.info(f"Company create race resolved: company_id={winner.id}, owner={owner}")
        return CompanyResult(company=winner, existed=True)
    except TrackerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create company: {e}", exc_info=True)
        raise Internal("Failed to create company") from e

    db.refresh(company)
    logger.info(f"Company created: company_id={company.id}, owner={owner}, name={company.name}")
    return CompanyResult(company=company, existed=False)


def update_company(db: Session, owner: Owner, company_id: int, fields: Dict[str, Any]) -> Company:
    """
    Rename and/or change the website of an owned company.

    Raises:
        NotFound: If the company is not the caller's
        InvalidArgument: If the new name is blank
        Conflict: If another company of the same owner already has the name
    """
    normalized = _normalized(fields["name"]) if "name" in fields else None

    company = get_company(db, owner, company_id)

    if normalized is not None:
        clash = find_company_by_name(db, owner, normalized.display)
        if clash is not None and clash.id != company.id:
            raise Conflict(
                "Company name already exists",
                details=f"Company {clash.id} is already named '{clash.name}'",
                resource=clash,
            )
        company.name = normalized.display
        company.normalized_name = normalized.key

    if "website" in fields:
        company.website = store.optional_text(fields["website"])

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_name_conflict(e):
            clash = find_company_by_name(db, owner, normalized.display) if normalized else None
            raise Conflict("Company name already exists", resource=clash) from e
        logger.error(f"Failed to update company: {e}", exc_info=True)
        raise Internal("Failed to update company", details=str(e.orig)) from e
    except TrackerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update company: {e}", exc_info=True)
        raise Internal("Failed to update company") from e

    db.refresh(company)
    logger.info(f"Company updated: company_id={company.id}, owner={owner}")
    return company


def delete_company(db: Session, owner: Owner, company_id: int) -> None:
    """Raises Conflict while jobs still reference the company."""
    store.delete_owned(db, Company, owner, company_id, RESOURCE)
