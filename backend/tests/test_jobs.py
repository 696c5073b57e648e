from datetime import datetime

from app.models import Application, Job, JobCategory, Role, WorkAssignment


def job_payload(category_id, **overrides):
    payload = {
        "title": "Weekend Caregiver",
        "description": "Saturday and Sunday care for an elderly man",
        "location": "Kigali",
        "salary": 20000,
        "salaryType": "DAILY",
        "skills": ["First aid"],
        "categoryId": category_id,
    }
    payload.update(overrides)
    return payload


# ============== Categories ==============


def test_create_category_then_list(client, admin_headers):
    created = client.post(
        "/api/v1/job-categories", json={"name": "Teacher"}, headers=admin_headers
    )
    client.post("/api/v1/job-categories", json={"name": "Caregiver"}, headers=admin_headers)

    assert created.status_code == 201
    names = [c["name"] for c in client.get("/api/v1/job-categories").json()["data"]]
    assert names == ["Caregiver", "Teacher"]


def test_duplicate_category_name(client, db, category, admin_headers):
    response = client.post("/api/v1/job-categories", json={"name": "Nanny"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "Job category with this name already exists"
    assert db.query(JobCategory).count() == 1


def test_only_admins_create_categories(client, recruiter_headers):
    response = client.post(
        "/api/v1/job-categories", json={"name": "Driver"}, headers=recruiter_headers
    )
    assert response.status_code == 403


def test_delete_category_in_use(client, db, job, category, admin_headers):
    response = client.delete(f"/api/v1/job-categories/{category.id}", headers=admin_headers)

    assert response.status_code == 400
    assert db.query(JobCategory).count() == 1


def test_delete_unused_category(client, db, category, admin_headers):
    response = client.delete(f"/api/v1/job-categories/{category.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Job category deleted successfully"


# ============== Jobs ==============


def test_recruiter_posts_job_as_themselves(client, category, recruiter_user, recruiter_headers):
    response = client.post(
        "/api/v1/jobs",
        json=job_payload(category.id, recruiterId=9999),
        headers=recruiter_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["recruiterId"] == recruiter_user.id
    assert data["category"]["name"] == "Nanny"
    assert data["recruiter"]["firstName"] == "Sarah"
    assert data["skills"] == ["First aid"]
    assert data["salaryType"] == "DAILY"
    assert data["isActive"] is True


def test_job_with_missing_category(client, db, recruiter_headers):
    response = client.post("/api/v1/jobs", json=job_payload(404), headers=recruiter_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Job category not found"
    assert db.query(Job).count() == 0


def test_admin_must_name_recruiter(client, category, admin_headers):
    response = client.post("/api/v1/jobs", json=job_payload(category.id), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "recruiterId is required"


def test_admin_posts_for_non_recruiter(client, category, worker_user, admin_headers):
    response = client.post(
        "/api/v1/jobs",
        json=job_payload(category.id, recruiterId=worker_user.id),
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Recruiter not found"


def test_workers_cannot_post_jobs(client, category, worker_headers):
    response = client.post("/api/v1/jobs", json=job_payload(category.id), headers=worker_headers)
    assert response.status_code == 403


def test_list_only_active_by_default(client, db, job, category, recruiter_user):
    db.add(
        Job(
            title="Closed posting",
            description="No longer hiring",
            category_id=category.id,
            recruiter_id=recruiter_user.id,
            is_active=False,
        )
    )
    db.commit()

    active = client.get("/api/v1/jobs").json()["data"]
    everything = client.get("/api/v1/jobs?activeOnly=false").json()["data"]

    assert [j["title"] for j in active] == ["Full-time Nanny"]
    assert len(everything) == 2


def test_list_search(client, job):
    assert len(client.get("/api/v1/jobs?search=nanny").json()["data"]) == 1
    assert client.get("/api/v1/jobs?search=plumber").json()["data"] == []


def test_get_job_with_applications(client, db, job, worker_user):
    db.add(Application(job_id=job.id, worker_id=worker_user.id, message="Hello"))
    db.commit()

    data = client.get(f"/api/v1/jobs/{job.id}").json()["data"]

    assert data["applications"][0]["worker"]["email"] == "worker@example.com"
    assert data["applications"][0]["status"] == "PENDING"
    assert data["workAssignments"] == []


def test_get_missing_job(client):
    response = client.get("/api/v1/jobs/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def test_my_jobs(client, job, make_user, category, headers_for):
    other = make_user(Role.RECRUITER)
    client.post("/api/v1/jobs", json=job_payload(category.id), headers=headers_for(other))

    response = client.get("/api/v1/jobs/myjobs", headers=headers_for(other))

    assert [j["title"] for j in response.json()["data"]] == ["Weekend Caregiver"]


def test_update_job(client, job, recruiter_headers):
    response = client.patch(
        f"/api/v1/jobs/{job.id}",
        json={"salary": 180000, "urgent": True},
        headers=recruiter_headers,
    )

    data = response.json()["data"]
    assert response.status_code == 200
    assert data["salary"] == 180000
    assert data["urgent"] is True
    assert data["title"] == "Full-time Nanny"


def test_update_job_to_missing_category(client, job, recruiter_headers):
    response = client.patch(
        f"/api/v1/jobs/{job.id}", json={"categoryId": 404}, headers=recruiter_headers
    )
    assert response.status_code == 404


def test_toggle_active(client, job, recruiter_headers):
    first = client.patch(f"/api/v1/jobs/{job.id}/toggle-active", headers=recruiter_headers)
    second = client.patch(f"/api/v1/jobs/{job.id}/toggle-active", headers=recruiter_headers)

    assert first.json()["message"] == "Job deactivated successfully"
    assert first.json()["data"]["isActive"] is False
    assert second.json()["data"]["isActive"] is True


def test_delete_job_with_application_is_refused(client, db, job, worker_user, recruiter_headers):
    db.add(Application(job_id=job.id, worker_id=worker_user.id))
    db.commit()

    response = client.delete(f"/api/v1/jobs/{job.id}", headers=recruiter_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete job with existing applications or assignments"
    assert db.query(Job).count() == 1


def test_delete_job(client, db, job, recruiter_headers):
    response = client.delete(f"/api/v1/jobs/{job.id}", headers=recruiter_headers)

    assert response.status_code == 200
    assert db.query(Job).count() == 0


def test_delete_job_with_assignment_is_refused(client, db, job, worker_user, recruiter_headers):
    db.add(
        WorkAssignment(
            job_id=job.id,
            worker_id=worker_user.id,
            recruiter_id=job.recruiter_id,
            work_date=datetime(2026, 11, 1),
        )
    )
    db.commit()

    response = client.delete(f"/api/v1/jobs/{job.id}", headers=recruiter_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete job with existing applications or assignments"
    assert db.query(Job).count() == 1
    assert db.query(WorkAssignment).count() == 1
