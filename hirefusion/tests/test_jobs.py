from datetime import datetime, timedelta, timezone

NOW = datetime.now(timezone.utc)


def test_all_jobs_newest_first(client, make_job):
    make_job(title="Old", created_at=NOW - timedelta(days=3))
    make_job(title="New", created_at=NOW)
    make_job(title="Middle", created_at=NOW - timedelta(days=1))

    r = client.get("/api/jobs/all-jobs")
    assert r.status_code == 200
    titles = [j["title"] for j in r.json()]
    assert titles == ["New", "Middle", "Old"]


def test_job_shape(client, make_job):
    job = make_job(
        company="Acme",
        location="Remote",
        job_type="Full-time",
        salary="$90,000 - $120,000",
        skills_required=["Python", "SQL"],
        apply_link="https://example.com/apply",
    )
    [item] = client.get("/api/jobs/all-jobs").json()
    assert item["_id"] == job.id
    assert item["jobType"] == "Full-time"
    assert item["skillsRequired"] == ["Python", "SQL"]
    assert item["applyLink"] == "https://example.com/apply"
    assert "createdAt" in item


def test_advanced_filter(client, make_job):
    make_job(title="Remote Python", company="Acme Corp", location="Remote - US", job_type="Full-time",
             salary="$100,000 - $140,000", skills_required=["Python", "FastAPI"])
    make_job(title="Onsite Python", company="Globex", location="Berlin", job_type="Full-time",
             salary="$60,000", skills_required=["Python"])
    make_job(title="Old Contract", company="Acme Corp", location="Remote", job_type="Contract",
             created_at=NOW - timedelta(days=40), skills_required=["Python"])

    def titles(filters):
        r = client.post("/api/advancedfilteredjobs", json=filters)
        assert r.status_code == 200, r.text
        return sorted(j["title"] for j in r.json())

    assert titles({}) == ["Old Contract", "Onsite Python", "Remote Python"]
    assert titles({"jobTypes": ["Full-time"]}) == ["Onsite Python", "Remote Python"]
    assert titles({"companies": ["acme"]}) == ["Old Contract", "Remote Python"]
    assert titles({"skills": ["python", "fastapi"]}) == ["Remote Python"]
    assert titles({"remoteOptions": ["remote"]}) == ["Old Contract", "Remote Python"]
    assert titles({"datePosted": "last_30_days"}) == ["Onsite Python", "Remote Python"]
    # jobs without a salary are kept
    assert titles({"salaryRange": [90000, 200000]}) == ["Old Contract", "Remote Python"]
