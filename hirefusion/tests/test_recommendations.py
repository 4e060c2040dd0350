import uuid

from sqlalchemy import func, select

from hirefusion import models


def rec_count(db):
    return db.execute(select(func.count()).select_from(models.JobRecommendation)).scalar_one()


def add(client, recs, email="jane@example.com"):
    return client.post("/api/recommendations/addjob", json={"email": email, "jobRecommendations": recs})


def test_add_and_list_recommendations_best_match_first(client, make_user, make_job):
    make_user()
    low, high, mid = make_job(title="low"), make_job(title="high"), make_job(title="mid")

    r = add(client, [
        {"jobID": low.id, "matchPercentage": 55},
        {"jobID": high.id, "matchPercentage": 97.5},
        {"jobID": mid.id, "matchPercentage": 70},
    ])
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["message"] == "Job recommendations added successfully"
    assert {rec["jobID"] for rec in body["recommendations"]} == {low.id, high.id, mid.id}
    assert body["recommendations"][1]["matchPercentage"] == 97.5

    r = client.get("/api/recommendations/getjobs", params={"email": "jane@example.com"})
    assert r.status_code == 200
    assert [j["title"] for j in r.json()] == ["high", "mid", "low"]


def test_duplicate_recommendations_are_kept_but_listed_once(client, db_session, make_user, make_job):
    make_user()
    job = make_job()
    assert add(client, [{"jobID": job.id, "matchPercentage": 60}]).status_code == 201
    assert add(client, [{"jobID": job.id, "matchPercentage": 80}]).status_code == 201

    assert rec_count(db_session) == 2
    jobs = client.get("/api/recommendations/getjobs", params={"email": "jane@example.com"}).json()
    assert len(jobs) == 1


def test_batch_with_out_of_range_entry_inserts_nothing(client, db_session, make_user, make_job):
    make_user()
    good, other = make_job(), make_job()

    r = add(client, [
        {"jobID": good.id, "matchPercentage": 90},
        {"jobID": other.id, "matchPercentage": 101},
    ])
    assert r.status_code == 400
    assert r.json()["message"] == "matchPercentage must be between 0 and 100"
    assert rec_count(db_session) == 0

    r = add(client, [{"jobID": good.id, "matchPercentage": -1}])
    assert r.status_code == 400
    assert rec_count(db_session) == 0


def test_batch_missing_job_id_inserts_nothing(client, db_session, make_user, make_job):
    make_user()
    job = make_job()
    r = add(client, [{"jobID": job.id, "matchPercentage": 90}, {"matchPercentage": 50}])
    assert r.status_code == 400
    assert r.json()["message"] == "Each recommendation needs a jobID"
    assert rec_count(db_session) == 0


def test_batch_with_unknown_job_inserts_nothing(client, db_session, make_user, make_job):
    make_user()
    job = make_job()
    missing = str(uuid.uuid4())
    r = add(client, [{"jobID": job.id, "matchPercentage": 90}, {"jobID": missing, "matchPercentage": 50}])
    assert r.status_code == 400
    assert missing in r.json()["message"]
    assert rec_count(db_session) == 0


def test_boundary_percentages_accepted(client, make_user, make_job):
    make_user()
    a, b = make_job(), make_job()
    r = add(client, [{"jobID": a.id, "matchPercentage": 0}, {"jobID": b.id, "matchPercentage": 100}])
    assert r.status_code == 201


def test_add_recommendations_errors(client, make_user):
    r = client.post("/api/recommendations/addjob", json={"jobRecommendations": []})
    assert r.status_code == 400
    assert r.json()["message"] == "Missing email"

    r = add(client, [], email="ghost@example.com")
    assert r.status_code == 404

    make_user()
    r = add(client, [])
    assert r.status_code == 200
    assert r.json()["message"] == "No job recommendations found"


def test_get_recommended_jobs_errors(client, make_user):
    assert client.get("/api/recommendations/getjobs").status_code == 400
    r = client.get("/api/recommendations/getjobs", params={"email": "ghost@example.com"})
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"

    make_user()
    r = client.get("/api/recommendations/getjobs", params={"email": "jane@example.com"})
    assert r.status_code == 404
    assert r.json()["message"] == "No recommendations found for this user"


def test_generate_recommendations_from_skills(client, make_user, make_job):
    make_user(skills=["Python 3", "SQL"])
    exact = make_job(title="exact", skills_required=["python", "sql"])
    make_job(title="unrelated", skills_required=["Java"])

    r = client.post("/api/recommendations/generate", json={"email": "jane@example.com"})
    assert r.status_code == 201, r.text
    [rec] = r.json()["recommendations"]
    assert rec["jobID"] == exact.id
    assert rec["matchPercentage"] == 100

    jobs = client.get("/api/recommendations/getjobs", params={"email": "jane@example.com"}).json()
    assert [j["title"] for j in jobs] == ["exact"]


def test_generate_recommendations_errors(client, make_user):
    make_user(skills=[])
    r = client.post("/api/recommendations/generate", json={"email": "jane@example.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "User has no skills"

    make_user(username="skilled", email="skilled@example.com", skills=["python"])
    r = client.post("/api/recommendations/generate", json={"email": "skilled@example.com"})
    assert r.status_code == 404
    assert r.json()["message"] == "No jobs available"
