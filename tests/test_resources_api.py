def test_room_crud_and_name_filter(api):
    created = api.post("/api/rooms/", json={"name": "Studio A", "type": "recording", "hourly_rate": 25})
    assert created.status_code == 201
    room = created.json()
    api.post("/api/rooms/", json={"name": "Podcast Booth"})

    found = api.get("/api/rooms/", params={"name": "studio"}).json()
    assert [r["name"] for r in found] == ["Studio A"]

    updated = api.put(f"/api/rooms/{room['id']}", json={"hourly_rate": 30})
    assert updated.status_code == 200
    assert updated.json()["hourly_rate"] == 30

    assert api.delete(f"/api/rooms/{room['id']}").status_code == 200
    assert api.get(f"/api/rooms/{room['id']}").status_code == 404


def test_equipment_defaults_to_available(api):
    response = api.post("/api/equipment/", json={"name": "Pioneer CDJ", "type": "player"})

    assert response.status_code == 201
    assert response.json()["status"] == "available"


def test_client_email_is_validated(api):
    bad = api.post("/api/clients/", json={"type": "individual", "name": "Dana", "email": "not-an-email"})
    good = api.post("/api/clients/", json={"type": "individual", "name": "Dana", "email": "dana@example.com"})

    assert bad.status_code == 400
    assert good.status_code == 201
    assert api.get(f"/api/clients/{good.json()['id']}").json()["email"] == "dana@example.com"


def test_enrollment_for_unknown_student_returns_404(api):
    studio_class = api.post("/api/classes/", json={"name": "DJ Basics"}).json()

    response = api.post("/api/enrollments/", json={"class_id": studio_class["id"], "student_id": "missing"})

    assert response.status_code == 404


def test_enrollment_update_keeps_its_class(api):
    studio_class = api.post("/api/classes/", json={"name": "DJ Basics", "fee": 100}).json()
    other_class = api.post("/api/classes/", json={"name": "Mixing"}).json()
    student = api.post("/api/clients/", json={"type": "student", "name": "Ana"}).json()
    enrollment = api.post(
        "/api/enrollments/", json={"class_id": studio_class["id"], "student_id": student["id"]}
    ).json()

    response = api.put(
        f"/api/enrollments/{enrollment['id']}", json={"class_id": other_class["id"], "feedback": "Great progress"}
    )

    assert response.status_code == 200
    assert response.json()["class_id"] == studio_class["id"]
    assert response.json()["feedback"] == "Great progress"
