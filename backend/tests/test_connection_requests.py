from app.models import ConnectionRequest, ConnectionStatus, Role


def request_connection(client, recruiter_profile, worker_profile, headers, message="We would like to meet"):
    return client.post(
        "/api/v1/connection-requests",
        json={
            "recruiterId": recruiter_profile.id,
            "workerId": worker_profile.id,
            "message": message,
        },
        headers=headers,
    )


def test_create_notifies_every_admin(
    client, make_user, admin, recruiter_profile, worker_profile, recruiter_headers, transport
):
    make_user(Role.ADMIN, email="second-admin@example.com")

    response = request_connection(client, recruiter_profile, worker_profile, recruiter_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "PENDING"
    assert data["recruiter"]["companyName"] == "Acme Care"
    assert data["worker"]["user"]["email"] == "worker@example.com"

    recipients = sorted(mail.to for mail in transport.sent)
    assert recipients == ["admin@example.com", "second-admin@example.com"]
    assert transport.sent[0].subject.startswith("New Connection Request: Sarah Chen")
    assert "http://admin.test/connections/pending" in transport.sent[0].html_body
    assert "We would like to meet" in transport.sent[0].html_body


def test_duplicate_pending_request(client, db, recruiter_profile, worker_profile, recruiter_headers):
    request_connection(client, recruiter_profile, worker_profile, recruiter_headers)
    response = request_connection(client, recruiter_profile, worker_profile, recruiter_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "Connection request already exists"
    assert db.query(ConnectionRequest).count() == 1


def test_new_request_allowed_after_cancel(
    client, db, admin_headers, recruiter_profile, worker_profile, recruiter_headers
):
    first = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]
    client.put(
        f"/api/v1/connection-requests/{first['id']}/status",
        json={"status": "CANCELLED"},
        headers=admin_headers,
    )

    response = request_connection(client, recruiter_profile, worker_profile, recruiter_headers)

    assert response.status_code == 201
    assert db.query(ConnectionRequest).count() == 2


def test_reopening_cancelled_request_conflicts(
    client, db, admin_headers, recruiter_profile, worker_profile, recruiter_headers
):
    first = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]
    client.put(
        f"/api/v1/connection-requests/{first['id']}/status",
        json={"status": "CANCELLED"},
        headers=admin_headers,
    )
    request_connection(client, recruiter_profile, worker_profile, recruiter_headers)

    response = client.put(
        f"/api/v1/connection-requests/{first['id']}/status",
        json={"status": "PENDING"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    db.expire_all()
    assert db.get(ConnectionRequest, first["id"]).status == ConnectionStatus.CANCELLED


def test_unknown_worker_profile(client, db, recruiter_profile, recruiter_headers):
    response = client.post(
        "/api/v1/connection-requests",
        json={"recruiterId": recruiter_profile.id, "workerId": 404},
        headers=recruiter_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Worker not found"
    assert db.query(ConnectionRequest).count() == 0


def test_workers_cannot_request(client, recruiter_profile, worker_profile, worker_headers):
    response = request_connection(client, recruiter_profile, worker_profile, worker_headers)
    assert response.status_code == 403


def test_approve_mails_both_parties(
    client, admin, admin_headers, recruiter_profile, worker_profile, recruiter_headers, transport
):
    created = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]
    transport.sent.clear()

    response = client.put(
        f"/api/v1/connection-requests/{created['id']}/status",
        json={"status": "APPROVED", "adminNotes": "Looks good"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "APPROVED"
    assert response.json()["data"]["adminNotes"] == "Looks good"

    subjects = {mail.to: mail.subject for mail in transport.sent}
    assert subjects == {
        "recruiter@example.com": "Connection Approved: John Doe",
        "worker@example.com": "New Connection: Sarah Chen from Acme Care",
    }


def test_reject_mails_recruiter_with_notes(
    client, admin, admin_headers, recruiter_profile, worker_profile, recruiter_headers, transport
):
    created = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]
    transport.sent.clear()

    client.put(
        f"/api/v1/connection-requests/{created['id']}/status",
        json={"status": "REJECTED", "adminNotes": "Worker is <unavailable>"},
        headers=admin_headers,
    )

    assert len(transport.sent) == 1
    mail = transport.sent[0]
    assert mail.to == "recruiter@example.com"
    assert mail.subject == "Connection Request Not Approved"
    assert "Worker is &lt;unavailable&gt;" in mail.html_body


def test_only_admins_decide(client, recruiter_profile, worker_profile, recruiter_headers):
    created = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]

    response = client.put(
        f"/api/v1/connection-requests/{created['id']}/status",
        json={"status": "APPROVED"},
        headers=recruiter_headers,
    )

    assert response.status_code == 403


def test_list_filters(client, admin_headers, recruiter_profile, worker_profile, recruiter_headers):
    request_connection(client, recruiter_profile, worker_profile, recruiter_headers)

    pending = client.get("/api/v1/connection-requests?status=PENDING", headers=admin_headers)
    approved = client.get("/api/v1/connection-requests?status=APPROVED", headers=admin_headers)
    by_worker = client.get(
        f"/api/v1/connection-requests?workerId={worker_profile.id}", headers=admin_headers
    )

    assert len(pending.json()["data"]) == 1
    assert approved.json()["data"] == []
    assert len(by_worker.json()["data"]) == 1


def test_missing_request(client, admin_headers):
    response = client.put(
        "/api/v1/connection-requests/999/status", json={"status": "APPROVED"}, headers=admin_headers
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Connection request not found"


def test_status_change_without_notes_keeps_them(
    client, db, admin, admin_headers, recruiter_profile, worker_profile, recruiter_headers
):
    created = request_connection(client, recruiter_profile, worker_profile, recruiter_headers).json()["data"]
    url = f"/api/v1/connection-requests/{created['id']}/status"
    client.put(url, json={"status": "APPROVED", "adminNotes": "Met in person"}, headers=admin_headers)

    response = client.put(url, json={"status": "CANCELLED"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["adminNotes"] == "Met in person"
    db.expire_all()
    assert db.get(ConnectionRequest, created["id"]).admin_notes == "Met in person"
