"""
Tests for jobs: reference checks, owner agreement and cascades.
"""
from datetime import date

import pytest

from jobtrack.core.errors import Conflict, Internal, InvalidArgument, NotFound
from jobtrack.core.pagination import Pagination
from jobtrack.db.models.application import Application
from jobtrack.db.models.job import Job
from jobtrack.services import application_service, company_service, job_service


def _job_fields(application, company, **extra):
    fields = {"application_id": application.id, "company_id": company.id, "title": "Backend Engineer"}
    fields.update(extra)
    return fields


def test_create_copies_owner_from_application(db, owner, application, company):
    job = job_service.create_job(db, owner, _job_fields(application, company, location="  Remote "))
    assert job.owner_id == owner
    assert job.application_id == application.id
    assert job.company_id == company.id
    assert job.location == "Remote"
    assert job.description is None


def test_create_with_foreign_application_is_not_found(db, owner, other_owner, company):
    foreign = application_service.create_application(db, other_owner, {"applied_date": date(2026, 2, 1)})

    with pytest.raises(NotFound) as exc_info:
        job_service.create_job(db, owner, _job_fields(foreign, company))
    assert exc_info.value.resource == "Application"
    assert db.query(Job).count() == 0


def test_create_with_foreign_company_is_not_found(db, owner, other_owner, application):
    foreign = company_service.get_or_create_company(db, other_owner, "Globex").company

    with pytest.raises(NotFound) as exc_info:
        job_service.create_job(db, owner, _job_fields(application, foreign))
    assert exc_info.value.resource == "Company"
    assert db.query(Job).count() == 0


def test_create_requires_title(db, owner, application, company):
    with pytest.raises(InvalidArgument) as exc_info:
        job_service.create_job(db, owner, _job_fields(application, company, title="  "))
    assert exc_info.value.field == "title"


def test_create_requires_references(db, owner, application, company):
    with pytest.raises(InvalidArgument) as exc_info:
        job_service.create_job(db, owner, {"title": "Engineer", "company_id": company.id})
    assert exc_info.value.field == "application_id"

    with pytest.raises(InvalidArgument) as exc_info:
        job_service.create_job(db, owner, {"title": "Engineer", "application_id": application.id})
    assert exc_info.value.field == "company_id"


def test_one_job_per_application(db, owner, application, company, job):
    with pytest.raises(Conflict):
        job_service.create_job(db, owner, _job_fields(application, company, title="Second"))
    assert db.query(Job).count() == 1


def test_get_job_for_application(db, owner, application, job):
    assert job_service.get_job_for_application(db, owner, application.id).id == job.id


def test_get_job_for_application_without_job(db, owner, application):
    with pytest.raises(NotFound) as exc_info:
        job_service.get_job_for_application(db, owner, application.id)
    assert exc_info.value.resource == "Job"


def test_update_fields(db, owner, job):
    updated = job_service.update_job(db, owner, job.id, {"title": "Staff Engineer", "description": ""})
    assert updated.title == "Staff Engineer"
    assert updated.description is None


def test_update_moves_to_owned_company(db, owner, job):
    other = company_service.get_or_create_company(db, owner, "Initech").company
    updated = job_service.update_job(db, owner, job.id, {"company_id": other.id})
    assert updated.company_id == other.id


def test_update_to_foreign_company_is_not_found(db, owner, other_owner, company, job):
    foreign = company_service.get_or_create_company(db, other_owner, "Globex").company
    with pytest.raises(NotFound):
        job_service.update_job(db, owner, job.id, {"company_id": foreign.id})
    db.expire_all()
    assert job_service.get_job(db, owner, job.id).company_id == company.id


def test_update_to_taken_application_is_conflict(db, owner, company, job):
    second_application = application_service.create_application(db, owner, {"applied_date": date(2026, 3, 1)})
    job_service.create_job(db, owner, _job_fields(second_application, company, title="Other"))

    with pytest.raises(Conflict):
        job_service.update_job(db, owner, job.id, {"application_id": second_application.id})


def test_owner_mismatch_is_internal():
    job = Job(id=1, owner_id="user_drift")
    application = Application(id=1, owner_id="user_alice")
    with pytest.raises(Internal):
        job_service._ensure_owner_agrees(job, application)


def test_drifted_job_is_not_found_for_either_owner(db, owner, job):
    db.query(Job).filter(Job.id == job.id).update({"owner_id": "user_drift"}, synchronize_session=False)
    db.commit()

    with pytest.raises(NotFound):
        job_service.update_job(db, owner, job.id, {"title": "Changed"})
    with pytest.raises(NotFound):
        job_service.update_job(db, "user_drift", job.id, {"title": "Changed"})


def test_other_owner_cannot_see_job(db, other_owner, job):
    with pytest.raises(NotFound):
        job_service.get_job(db, other_owner, job.id)
    with pytest.raises(NotFound):
        job_service.delete_job(db, other_owner, job.id)


def test_list_jobs_for_company(db, owner, company, job):
    jobs, total = job_service.list_jobs_for_company(db, owner, company.id, Pagination())
    assert total == 1
    assert jobs[0].id == job.id


def test_list_jobs_for_foreign_company(db, other_owner, company, job):
    with pytest.raises(NotFound):
        job_service.list_jobs_for_company(db, other_owner, company.id, Pagination())


def test_deleting_application_removes_job(db, owner, application, job):
    job_id = job.id
    application_service.delete_application(db, owner, application.id)
    assert db.query(Job).filter(Job.id == job_id).first() is None


def test_delete_job_keeps_application(db, owner, application, job):
    job_service.delete_job(db, owner, job.id)
    assert application_service.get_application(db, owner, application.id).id == application.id
    jobs, total = job_service.list_jobs(db, owner, Pagination())
    assert total == 0
