"""
Test suite for job endpoints and the job CRUD layer.

Tests cover:
- Job creation (admin only)
- Job listing and filtering
- Job retrieval
- Partial updates
- Deletion
"""

import pytest

from jobly.core.database import execute
from jobly.core.exceptions import BadRequestError, EmptyUpdate, NoValidCriteria, NotFoundError
from jobly.crud import job as job_crud
from jobly.schemas.job import JobCreateRequest


@pytest.fixture
def new_job():
    return {
        "title": "new",
        "salary": 50,
        "equity": 0.5,
        "companyHandle": "c1"
    }


class TestJobCreation:
    """Tests for POST /jobs"""

    def test_create_job_as_admin(self, client, seeded, admin_headers, new_job):
        response = client.post("/api/v1/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert job["title"] == "new"
        assert job["salary"] == 50
        assert job["equity"] == 0.5
        assert job["companyHandle"] == "c1"

    def test_create_job_non_admin(self, client, seeded, u1_headers, new_job):
        response = client.post("/api/v1/jobs", json=new_job, headers=u1_headers)

        assert response.status_code == 401

    def test_create_job_anon(self, client, seeded, new_job):
        response = client.post("/api/v1/jobs", json=new_job)

        assert response.status_code == 401

    def test_create_job_missing_fields(self, client, seeded, admin_headers):
        response = client.post("/api/v1/jobs", json={"title": "new"}, headers=admin_headers)

        assert response.status_code == 422

    def test_create_job_invalid_equity(self, client, seeded, admin_headers, new_job):
        new_job["equity"] = 1.5

        response = client.post("/api/v1/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 422

    def test_create_job_unknown_company(self, client, seeded, admin_headers, new_job):
        new_job["companyHandle"] = "nope"

        response = client.post("/api/v1/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 400
        assert "no company" in response.json()["detail"].lower()


class TestJobListing:
    """Tests for GET /jobs"""

    def test_list_jobs_anon(self, client, seeded):
        response = client.get("/api/v1/jobs")

        assert response.status_code == 200
        jobs = response.json()["jobs"]
        assert [job["title"] for job in jobs] == ["j1", "j2", "j3"]
        assert jobs[0] == {
            "id": seeded[0],
            "title": "j1",
            "salary": 1,
            "equity": 0.1,
            "companyHandle": "c1"
        }

    def test_filter_by_title(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"title": "1"})

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["j1"]

    def test_filter_by_title_is_case_insensitive(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"title": "J"})

        assert len(response.json()["jobs"]) == 3

    def test_filter_by_title_and_min_salary(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"title": "j", "minSalary": 2})

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["j2", "j3"]

    def test_filter_has_equity(self, client, seeded, db_session):
        execute(db_session, "UPDATE jobs SET equity = 0 WHERE title = $1", ["j1"])
        db_session.commit()

        response = client.get("/api/v1/jobs", params={"hasEquity": "true"})

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["j2", "j3"]

    def test_has_equity_false_does_not_filter(self, client, seeded, db_session):
        execute(db_session, "UPDATE jobs SET equity = 0 WHERE title = $1", ["j1"])
        db_session.commit()

        response = client.get("/api/v1/jobs", params={"hasEquity": "false"})

        assert response.status_code == 200
        assert len(response.json()["jobs"]) == 3

    def test_unknown_criteria_ignored_alongside_valid(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"title": "j3", "color": "blue"})

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["j3"]

    def test_only_invalid_criteria(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"invalid": "invalid"})

        assert response.status_code == 400

    def test_invalid_min_salary(self, client, seeded):
        response = client.get("/api/v1/jobs", params={"minSalary": "lots"})

        assert response.status_code == 422


class TestJobRetrieval:
    """Tests for GET /jobs/{job_id}"""

    def test_get_job_anon(self, client, seeded):
        response = client.get(f"/api/v1/jobs/{seeded[0]}")

        assert response.status_code == 200
        assert response.json() == {
            "job": {
                "id": seeded[0],
                "title": "j1",
                "salary": 1,
                "equity": 0.1,
                "companyHandle": "c1"
            }
        }

    def test_get_nonexistent_job(self, client, seeded):
        response = client.get("/api/v1/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["detail"].lower()


class TestJobUpdate:
    """Tests for PATCH /jobs/{job_id}"""

    def test_update_job_as_admin(self, client, seeded, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{seeded[0]}",
            json={"title": "j1-new", "salary": 0},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["job"] == {
            "id": seeded[0],
            "title": "j1-new",
            "salary": 0,
            "equity": 0.1,
            "companyHandle": "c1"
        }

    def test_update_job_non_admin(self, client, seeded, u1_headers):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={"title": "x"}, headers=u1_headers)

        assert response.status_code == 401

    def test_update_job_anon(self, client, seeded):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={"title": "x"})

        assert response.status_code == 401

    def test_update_nonexistent_job(self, client, seeded, admin_headers):
        response = client.patch("/api/v1/jobs/99999", json={"title": "x"}, headers=admin_headers)

        assert response.status_code == 404

    def test_cannot_change_id(self, client, seeded, admin_headers):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={"id": 42}, headers=admin_headers)

        assert response.status_code == 422

    def test_cannot_change_company(self, client, seeded, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{seeded[0]}",
            json={"companyHandle": "c2"},
            headers=admin_headers
        )

        assert response.status_code == 422

    def test_null_title_rejected(self, client, seeded, admin_headers):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={"title": None}, headers=admin_headers)

        assert response.status_code == 422

    def test_null_salary_clears_it(self, client, seeded, admin_headers):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={"salary": None}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["job"]["salary"] is None

    def test_empty_update(self, client, seeded, admin_headers):
        response = client.patch(f"/api/v1/jobs/{seeded[0]}", json={}, headers=admin_headers)

        assert response.status_code == 400


class TestJobDeletion:
    """Tests for DELETE /jobs/{job_id}"""

    def test_delete_job_as_admin(self, client, seeded, admin_headers):
        response = client.delete(f"/api/v1/jobs/{seeded[0]}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": str(seeded[0])}
        assert client.get(f"/api/v1/jobs/{seeded[0]}").status_code == 404

    def test_delete_job_non_admin(self, client, seeded, u1_headers):
        response = client.delete(f"/api/v1/jobs/{seeded[0]}", headers=u1_headers)

        assert response.status_code == 401

    def test_delete_job_anon(self, client, seeded):
        response = client.delete(f"/api/v1/jobs/{seeded[0]}")

        assert response.status_code == 401

    def test_delete_nonexistent_job(self, client, seeded, admin_headers):
        response = client.delete("/api/v1/jobs/99999", headers=admin_headers)

        assert response.status_code == 404


class TestJobCrud:
    """Tests for the job CRUD layer"""

    def test_create(self, db_session, seeded):
        job = job_crud.create(db_session, JobCreateRequest(
            title="new", salary=100, equity=0.0, company_handle="c2"
        ))

        assert job["title"] == "new"
        assert job["companyHandle"] == "c2"
        assert job_crud.get(db_session, job["id"]) == job

    def test_create_unknown_company(self, db_session, seeded):
        with pytest.raises(BadRequestError):
            job_crud.create(db_session, JobCreateRequest(title="new", company_handle="nope"))

    def test_filter_by_min_salary(self, db_session, seeded):
        jobs = job_crud.filter_by(db_session, {"minSalary": 3})

        assert [job["title"] for job in jobs] == ["j3"]

    def test_filter_by_only_dropped_criteria_returns_all(self, db_session, seeded):
        jobs = job_crud.filter_by(db_session, {"hasEquity": False})

        assert len(jobs) == 3

    def test_filter_by_no_valid_criteria(self, db_session, seeded):
        with pytest.raises(NoValidCriteria):
            job_crud.filter_by(db_session, {"salary": 3})

    def test_update_keeps_null(self, db_session, seeded):
        job = job_crud.update(db_session, seeded[1], {"equity": None})

        assert job["equity"] is None
        assert job["title"] == "j2"

    def test_update_empty(self, db_session, seeded):
        with pytest.raises(EmptyUpdate):
            job_crud.update(db_session, seeded[0], {})

    def test_remove_missing(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, 99999)
