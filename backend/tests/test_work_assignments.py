from datetime import datetime

from app.models import AssignmentStatus, Role, WorkAssignment


def assignment_payload(job, worker_user, **overrides):
    payload = {
        "jobId": job.id,
        "workerId": worker_user.id,
        "workDate": "2026-11-02T00:00:00",
        "startTime": "2026-11-02T08:00:00",
        "endTime": "2026-11-02T17:00:00",
        "notes": "Bring references",
    }
    payload.update(overrides)
    return payload


def test_recruiter_creates_assignment(client, job, worker_user, recruiter_user, recruiter_headers, transport):
    response = client.post(
        "/api/v1/work-assignments",
        json=assignment_payload(job, worker_user),
        headers=recruiter_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "ACTIVE"
    assert data["recruiterId"] == recruiter_user.id
    assert data["worker"]["email"] == "worker@example.com"
    assert data["recruiter"]["firstName"] == "Sarah"

    mail = transport.to("worker@example.com")[0]
    assert mail.subject == "Work Assignment Confirmed: Full-time Nanny"
    assert "2026-11-02" in mail.html_body
    assert "08:00" in mail.html_body
    assert "17:00" in mail.html_body


def test_admin_assignment_defaults_to_job_owner(client, job, worker_user, recruiter_user, admin_headers):
    response = client.post(
        "/api/v1/work-assignments",
        json=assignment_payload(job, worker_user),
        headers=admin_headers,
    )

    assert response.json()["data"]["recruiterId"] == recruiter_user.id


def test_duplicate_assignment_same_day(client, db, job, worker_user, recruiter_headers):
    payload = assignment_payload(job, worker_user)
    client.post("/api/v1/work-assignments", json=payload, headers=recruiter_headers)
    response = client.post("/api/v1/work-assignments", json=payload, headers=recruiter_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "Worker already assigned to this job on the specified date"
    assert db.query(WorkAssignment).count() == 1


def test_same_worker_on_another_day(client, db, job, worker_user, recruiter_headers):
    client.post(
        "/api/v1/work-assignments", json=assignment_payload(job, worker_user), headers=recruiter_headers
    )
    response = client.post(
        "/api/v1/work-assignments",
        json=assignment_payload(job, worker_user, workDate="2026-11-03T00:00:00"),
        headers=recruiter_headers,
    )

    assert response.status_code == 201
    assert db.query(WorkAssignment).count() == 2


def test_assignment_for_missing_worker(client, db, job, recruiter_headers, transport):
    response = client.post(
        "/api/v1/work-assignments",
        json={"jobId": job.id, "workerId": 404, "workDate": "2026-11-02T00:00:00"},
        headers=recruiter_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Worker not found"
    assert db.query(WorkAssignment).count() == 0
    assert transport.sent == []


def test_assignment_for_missing_job(client, worker_user, recruiter_headers):
    response = client.post(
        "/api/v1/work-assignments",
        json={"jobId": 404, "workerId": worker_user.id, "workDate": "2026-11-02T00:00:00"},
        headers=recruiter_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def assign(db, job, worker_user, day, **fields):
    assignment = WorkAssignment(
        job_id=job.id,
        worker_id=worker_user.id,
        recruiter_id=job.recruiter_id,
        work_date=datetime(2026, 11, day),
        **fields,
    )
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def test_listing_latest_work_date_first(client, db, job, worker_user, worker_headers):
    assign(db, job, worker_user, 1)
    assign(db, job, worker_user, 9)
    assign(db, job, worker_user, 5)

    data = client.get(f"/api/v1/work-assignments/worker/{worker_user.id}", headers=worker_headers).json()["data"]

    assert [a["workDate"][:10] for a in data] == ["2026-11-09", "2026-11-05", "2026-11-01"]


def test_find_by_job_and_recruiter(client, db, job, worker_user, recruiter_user, recruiter_headers):
    assign(db, job, worker_user, 1)

    by_job = client.get(f"/api/v1/work-assignments/job/{job.id}", headers=recruiter_headers)
    by_recruiter = client.get(
        f"/api/v1/work-assignments/recruiter/{recruiter_user.id}", headers=recruiter_headers
    )

    assert len(by_job.json()["data"]) == 1
    assert len(by_recruiter.json()["data"]) == 1


def test_update_status(client, db, job, worker_user, recruiter_headers):
    assignment = assign(db, job, worker_user, 1)

    response = client.patch(
        f"/api/v1/work-assignments/{assignment.id}/status?status=COMPLETED",
        headers=recruiter_headers,
    )

    assert response.json()["data"]["status"] == "COMPLETED"
    db.expire_all()
    assert db.get(WorkAssignment, assignment.id).status == AssignmentStatus.COMPLETED


def test_move_onto_taken_date_conflicts(client, job, db, worker_user, recruiter_headers):
    assign(db, job, worker_user, 1)
    second = assign(db, job, worker_user, 2)

    response = client.patch(
        f"/api/v1/work-assignments/{second.id}",
        json={"workDate": "2026-11-01T00:00:00"},
        headers=recruiter_headers,
    )

    assert response.status_code == 409


def test_update_to_non_recruiter(client, db, job, worker_user, make_user, recruiter_headers):
    assignment = assign(db, job, worker_user, 1)
    other_worker = make_user(Role.WORKER)

    response = client.patch(
        f"/api/v1/work-assignments/{assignment.id}",
        json={"recruiterId": other_worker.id},
        headers=recruiter_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Recruiter not found"


def test_delete_assignment(client, db, job, worker_user, recruiter_headers):
    assignment = assign(db, job, worker_user, 1)

    response = client.delete(f"/api/v1/work-assignments/{assignment.id}", headers=recruiter_headers)

    assert response.status_code == 200
    assert client.get(
        f"/api/v1/work-assignments/{assignment.id}", headers=recruiter_headers
    ).status_code == 404


def test_update_to_missing_job_or_worker_leaves_row(client, db, job, worker_user, recruiter_headers):
    assignment = assign(db, job, worker_user, 1)
    url = f"/api/v1/work-assignments/{assignment.id}"

    missing_job = client.patch(url, json={"jobId": 404}, headers=recruiter_headers)
    missing_worker = client.patch(url, json={"workerId": 404}, headers=recruiter_headers)

    assert missing_job.status_code == 404
    assert missing_job.json()["message"] == "Job not found"
    assert missing_worker.status_code == 404
    assert missing_worker.json()["message"] == "Worker not found"
    db.expire_all()
    stored = db.get(WorkAssignment, assignment.id)
    assert (stored.job_id, stored.worker_id) == (job.id, worker_user.id)
