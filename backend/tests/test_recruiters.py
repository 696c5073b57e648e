from app.models import Recruiter, RecruiterType, Role, User


def registration(**overrides):
    payload = {
        "email": "hire@acme.com",
        "password": "secret123",
        "firstName": "Ann",
        "lastName": "Smith",
        "companyName": "Acme",
        "type": "COMPANY",
        "location": "Kigali",
    }
    payload.update(overrides)
    return payload


def test_self_registration_creates_user_and_profile(client, db, transport):
    response = client.post("/api/v1/recruiters", json=registration())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["companyName"] == "Acme"
    assert data["type"] == "COMPANY"
    assert data["verified"] is False
    assert data["user"]["email"] == "hire@acme.com"

    user = db.query(User).filter(User.email == "hire@acme.com").one()
    assert user.role == Role.RECRUITER

    mail = transport.to("hire@acme.com")[0]
    assert mail.subject == "Welcome to CareBridge - Start Finding Top Talent!"
    assert "Company" in mail.html_body


def test_registration_with_taken_email(client, db, worker_user):
    response = client.post("/api/v1/recruiters", json=registration(email="worker@example.com"))

    assert response.status_code == 409
    assert response.json()["message"] == "User with this email already exists"
    assert db.query(Recruiter).count() == 0


def make_recruiters(make_user, db, count):
    for index in range(count):
        user = make_user(Role.RECRUITER)
        db.add(
            Recruiter(
                user_id=user.id,
                company_name=f"Company {index}",
                type=RecruiterType.GROUP if index % 2 else RecruiterType.COMPANY,
                location="Huye" if index == 0 else "Kigali",
                verified=index == 0,
            )
        )
    db.commit()


def test_list_pagination_block(client, db, make_user):
    make_recruiters(make_user, db, 5)

    response = client.get("/api/v1/recruiters?page=2&limit=2")

    data = response.json()["data"]
    assert len(data["recruiters"]) == 2
    assert data["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 5,
        "itemsPerPage": 2,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }


def test_list_filters(client, db, make_user):
    make_recruiters(make_user, db, 4)

    by_location = client.get("/api/v1/recruiters?location=huye").json()["data"]
    by_verified = client.get("/api/v1/recruiters?verified=true").json()["data"]
    by_search = client.get("/api/v1/recruiters?search=company 3").json()["data"]
    by_type = client.get("/api/v1/recruiters?type=GROUP").json()["data"]

    assert [r["companyName"] for r in by_location["recruiters"]] == ["Company 0"]
    assert [r["companyName"] for r in by_verified["recruiters"]] == ["Company 0"]
    assert [r["companyName"] for r in by_search["recruiters"]] == ["Company 3"]
    assert by_type["pagination"]["totalItems"] == 2


def test_stats(client, db, make_user):
    make_recruiters(make_user, db, 3)

    data = client.get("/api/v1/recruiters/stats").json()["data"]

    assert data == {
        "total": 3,
        "verified": 1,
        "unverified": 2,
        "byType": {"COMPANY": 2, "GROUP": 1},
    }


def test_find_by_user_id(client, recruiter_profile, recruiter_user):
    response = client.get(f"/api/v1/recruiters/user/{recruiter_user.id}")
    assert response.json()["data"]["id"] == recruiter_profile.id


def test_find_missing_recruiter(client):
    response = client.get("/api/v1/recruiters/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Recruiter not found"


def test_verify_unverify_toggle(client, recruiter_profile, admin_headers):
    base = f"/api/v1/recruiters/{recruiter_profile.id}"

    assert client.patch(f"{base}/verify", headers=admin_headers).json()["data"]["verified"] is True
    assert client.patch(f"{base}/unverify", headers=admin_headers).json()["data"]["verified"] is False

    toggled = client.patch(f"{base}/toggle-verified", headers=admin_headers).json()
    assert toggled["data"]["verified"] is True
    assert toggled["message"] == "Recruiter verified successfully"


def test_verify_requires_admin(client, recruiter_profile, recruiter_headers):
    response = client.patch(
        f"/api/v1/recruiters/{recruiter_profile.id}/verify", headers=recruiter_headers
    )
    assert response.status_code == 403


def test_update_profile_fields(client, recruiter_profile, recruiter_headers):
    response = client.patch(
        f"/api/v1/recruiters/{recruiter_profile.id}",
        json={"companyName": "Acme Care Ltd", "website": "https://acme.example"},
        headers=recruiter_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["companyName"] == "Acme Care Ltd"
    assert response.json()["data"]["website"] == "https://acme.example"


def test_reassign_to_missing_user(client, recruiter_profile, admin_headers):
    response = client.patch(
        f"/api/v1/recruiters/{recruiter_profile.id}", json={"userId": 999}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "User does not exist"


def test_reassign_to_user_with_profile(client, db, make_user, recruiter_profile, admin_headers):
    other = make_user(Role.RECRUITER)
    db.add(Recruiter(user_id=other.id, company_name="Other"))
    db.commit()

    response = client.patch(
        f"/api/v1/recruiters/{recruiter_profile.id}", json={"userId": other.id}, headers=admin_headers
    )

    assert response.status_code == 409
    assert response.json()["message"] == "Another recruiter profile already exists for this user"


def test_delete_recruiter(client, db, recruiter_profile, admin_headers):
    response = client.delete(f"/api/v1/recruiters/{recruiter_profile.id}", headers=admin_headers)

    assert response.status_code == 200
    db.expire_all()
    assert db.query(Recruiter).count() == 0
