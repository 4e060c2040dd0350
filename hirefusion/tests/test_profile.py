import uuid

EXPERIENCE = {
    "company": "Acme",
    "position": "Engineer",
    "description": "APIs",
    "startDate": "2021-01",
    "endDate": None,
    "current": True,
}
EDUCATION = {
    "institution": "State University",
    "degree": "BSc",
    "field": "Computer Science",
    "startDate": "2016-09",
    "endDate": "2020-06",
    "current": False,
}


def test_add_profile_writes_supplied_fields(client, make_user):
    make_user()
    r = client.post("/api/users/addprofile", json={
        "email": "jane@example.com",
        "skills": ["python", "sql"],
        "experience": [EXPERIENCE],
        "education": [EDUCATION],
        "preferences": "Remote only",
    })
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Profile updated"
    user = body["user"]
    assert user["skills"] == ["python", "sql"]
    assert user["experience"][0]["startDate"] == "2021-01"
    assert user["education"][0]["field"] == "Computer Science"
    assert user["preferences"] == "Remote only"
    assert "hashedPassword" not in user and "verifyCode" not in user


def test_partial_update_keeps_other_fields(client, make_user):
    make_user(skills=["python"], preferences="Remote only")
    r = client.post("/api/users/addprofile", json={"email": "jane@example.com", "preferences": ""})
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["preferences"] == ""
    assert user["skills"] == ["python"]

    r = client.post("/api/users/addprofile", json={"email": "jane@example.com", "skills": []})
    assert r.json()["user"]["skills"] == []
    assert r.json()["user"]["preferences"] == ""


def test_saved_jobs_replaced_through_profile(client, make_user, make_job):
    make_user()
    a, b = make_job(title="a"), make_job(title="b")
    client.post("/api/savedjobs/addjob", json={"email": "jane@example.com", "jobId": a.id})

    r = client.post("/api/users/addprofile", json={"email": "jane@example.com", "savedJobs": [b.id]})
    assert r.status_code == 200, r.text
    assert r.json()["user"]["savedJobs"] == [b.id]

    r = client.post("/api/users/addprofile", json={"email": "jane@example.com", "savedJobs": ["nope"]})
    assert r.status_code == 400
    r = client.post("/api/users/addprofile", json={"email": "jane@example.com", "savedJobs": [str(uuid.uuid4())]})
    assert r.status_code == 400


def test_add_profile_errors(client):
    r = client.post("/api/users/addprofile", json={"skills": ["go"]})
    assert r.status_code == 400
    assert r.json()["message"] == "User email is required"

    r = client.post("/api/users/addprofile", json={"email": "ghost@example.com", "skills": ["go"]})
    assert r.status_code == 404

    r = client.post("/api/users/addprofile", json={"email": "ghost@example.com", "savedJobs": ["nope"]})
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


def test_get_user_normalizes_email(client, make_user):
    make_user(skills=["python"])
    r = client.get("/api/users/getuser", params={"email": "  JANE@Example.com "})
    assert r.status_code == 200
    profile = r.json()["profile"]
    assert profile["email"] == "jane@example.com"
    assert profile["username"] == "jane_doe"
    assert profile["isVerified"] is True
    assert profile["savedJobs"] == []
    assert "hashedPassword" not in profile and "verifyCode" not in profile

    assert client.get("/api/users/getuser").status_code == 400
    assert client.get("/api/users/getuser", params={"email": "ghost@example.com"}).status_code == 404


def test_update_user_replaces_profile(client, make_user):
    make_user(skills=["python"], preferences="Remote")
    r = client.post("/api/users/updateuser", json={
        "email": "jane@example.com",
        "username": "jane_smith",
        "preferences": None,
        "skills": ["go"],
        "education": [EDUCATION],
        "experience": [],
    })
    assert r.status_code == 200, r.text
    profile = r.json()["profile"]
    assert profile["username"] == "jane_smith"
    assert profile["skills"] == ["go"]
    assert profile["preferences"] is None
    assert profile["experience"] == []


def test_update_user_validation(client, make_user):
    make_user()
    make_user(username="taken_name", email="other@example.com")

    r = client.post("/api/users/updateuser", json={"email": "jane@example.com", "username": "jane"})
    assert r.status_code == 400
    assert r.json()["message"] == "Missing or invalid required fields"

    full = {"email": "jane@example.com", "skills": [], "education": [], "experience": []}
    r = client.post("/api/users/updateuser", json={**full, "username": "taken_name"})
    assert r.status_code == 400
    assert r.json()["message"] == "Username is already taken"

    r = client.post("/api/users/updateuser", json={**full, "email": "ghost@example.com", "username": "ghost"})
    assert r.status_code == 404
