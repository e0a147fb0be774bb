from conftest import API, login, make_account, make_admin, make_employer, make_talent


def test_setup_grants_admin_to_existing_account(client, db):
    account = make_account(db, email="boss@example.com")

    response = client.post(
        f"{API}/admin/setup",
        json={"email": "boss@example.com", "password": "secret123", "name": "Boss"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["uid"] == account.uid
    assert body["role"] == "admin"
    assert body["permissions"]

    headers = login(client, "boss@example.com")
    me = client.get(f"{API}/auth/me", headers=headers).json()
    assert me["profile"]["role"] == "admin"
    assert me["profile"]["name"] == "Boss"


def test_setup_twice_is_rejected(client, db):
    make_account(db, email="boss@example.com")
    payload = {"email": "boss@example.com", "password": "secret123", "name": "Boss"}

    assert client.post(f"{API}/admin/setup", json=payload).status_code == 201
    headers = login(client, "boss@example.com")
    assert client.post(f"{API}/admin/setup", json=payload, headers=headers).status_code == 400


def test_setup_is_closed_to_non_admins_once_an_admin_exists(client, db, admin_user, talent_user):
    talent, talent_headers = talent_user
    payload = {"email": talent.email, "password": "secret123", "name": "Mallory"}

    assert client.post(f"{API}/admin/setup", json=payload).status_code == 401
    assert client.post(f"{API}/admin/setup", json=payload, headers=talent_headers).status_code == 403
    assert client.get(f"{API}/admin/stats", headers=talent_headers).status_code == 403


def test_admin_can_promote_another_account(client, db, admin_user):
    _, headers = admin_user
    other = make_account(db, email="second@example.com")

    response = client.post(
        f"{API}/admin/setup",
        json={"email": "second@example.com", "password": "secret123", "name": "Second"},
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["uid"] == other.uid


def test_setup_requires_valid_credentials(client, db):
    make_account(db, email="boss@example.com")

    response = client.post(
        f"{API}/admin/setup",
        json={"email": "boss@example.com", "password": "wrong-password", "name": "Boss"},
    )

    assert response.status_code == 401


def test_admin_views(client, db, admin_user):
    _, headers = admin_user
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2", video=False)
    make_employer(db, employer_id="e1")

    talents = client.get(f"{API}/admin/talents", headers=headers).json()
    employers = client.get(f"{API}/admin/employers", headers=headers).json()
    admins = client.get(f"{API}/admin/admins", headers=headers).json()

    assert talents["total"] == 2
    assert employers["total"] == 1
    assert employers["employers"][0]["id"] == "e1"
    assert admins["total"] == 1


def test_stats_count_swipes_by_status(client, db, admin_user, employer_user):
    _, admin_headers = admin_user
    _, employer_headers = employer_user
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2")
    blank = make_talent(db, talent_id="t3", video=False)
    blank.video_pitch = ""
    db.commit()
    client.put(f"{API}/discover/swipes/t1", json={"status": "liked"}, headers=employer_headers)
    client.put(f"{API}/discover/swipes/t2", json={"status": "passed"}, headers=employer_headers)

    stats = client.get(f"{API}/admin/stats", headers=admin_headers).json()

    assert stats["total_talents"] == 3
    assert stats["talents_with_video"] == 2
    assert client.get(f"{API}/discover/candidates", headers=employer_headers).json() == []
    assert stats["total_employers"] == 1
    assert stats["total_swipes"] == 2
    assert stats["liked"] == 1
    assert stats["passed"] == 1
    assert stats["saved"] == 0


def test_remove_admin(client, db, admin_user):
    account, headers = admin_user
    other = make_account(db, email="second@example.com")
    make_admin(db, uid=other.uid, email=other.email)

    assert client.delete(f"{API}/admin/admins/{account.uid}", headers=headers).status_code == 400
    assert client.delete(f"{API}/admin/admins/{other.uid}", headers=headers).status_code == 200
    assert client.delete(f"{API}/admin/admins/{other.uid}", headers=headers).status_code == 404


def test_admin_area_rejects_other_roles(client, employer_user):
    _, headers = employer_user

    response = client.get(f"{API}/admin/stats", headers=headers)

    assert response.status_code == 403
