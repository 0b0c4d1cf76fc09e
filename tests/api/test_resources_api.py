"""API tests for the owned resources: skills, jobs, required skills, goals, applications."""

import pytest


def create(client, path, headers, body):
    response = client.post(path, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def delete(client, path, headers, resource_id):
    return client.request("DELETE", path, json={"id": resource_id}, headers=headers)


# ============================================================
# SKILLS
# ============================================================

@pytest.mark.api
def test_skill_crud(client, alice_headers):
    go = create(client, "/skills", alice_headers, {"name": "Go", "level": 3, "category": "Languages"})
    create(client, "/skills", alice_headers, {"name": "Bash", "level": "2"})

    listed = client.get("/skills", headers=alice_headers).json()
    assert [s["name"] for s in listed] == ["Bash", "Go"]
    assert listed[1]["category"] == "Languages"

    assert delete(client, "/skills", alice_headers, go["id"]).json() == {"ok": True}
    assert [s["name"] for s in client.get("/skills", headers=alice_headers).json()] == ["Bash"]


@pytest.mark.api
@pytest.mark.parametrize("body", [
    {"name": "Go", "level": 0},
    {"name": "Go", "level": 6},
    {"name": "", "level": 3},
    {"level": 3},
])
def test_skill_validation(client, alice_headers, body):
    assert client.post("/skills", json=body, headers=alice_headers).status_code == 400


@pytest.mark.api
def test_supplied_owner_is_ignored(client, alice_headers, bob_headers):
    bob = client.get("/me", headers=bob_headers).json()

    skill = create(client, "/skills", alice_headers, {"name": "Go", "level": 3, "owner_id": bob["id"]})

    assert skill["owner_id"] != bob["id"]
    assert client.get("/skills", headers=bob_headers).json() == []


@pytest.mark.api
def test_lists_are_scoped_to_caller(client, alice_headers, bob_headers):
    create(client, "/skills", alice_headers, {"name": "Go", "level": 3})
    create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Keep it up"})
    create(client, "/goals", alice_headers, {"title": "Learn Go"})
    create(client, "/applications", alice_headers, {"company": "Acme", "role": "SRE"})

    for path in ["/skills", "/jobs", "/goals", "/applications"]:
        assert client.get(path, headers=bob_headers).json() == []
        assert len(client.get(path, headers=alice_headers).json()) == 1


@pytest.mark.api
@pytest.mark.parametrize("path, body", [
    ("/skills", {"name": "Go", "level": 3}),
    ("/jobs", {"title": "SRE", "description": "Keep it up"}),
    ("/goals", {"title": "Learn Go"}),
    ("/applications", {"company": "Acme", "role": "SRE"}),
])
def test_delete_of_foreign_row_is_404_like_missing_row(client, alice_headers, bob_headers, path, body):
    row = create(client, path, alice_headers, body)

    foreign = delete(client, path, bob_headers, row["id"])
    missing = delete(client, path, bob_headers, "no-such-id")

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()
    assert len(client.get(path, headers=alice_headers).json()) == 1


# ============================================================
# JOB TARGETS & REQUIRED SKILLS
# ============================================================

@pytest.mark.api
def test_job_detail_with_gap_analysis(client, alice_headers):
    create(client, "/skills", alice_headers, {"name": "react", "level": 2})
    job = create(client, "/jobs", alice_headers, {
        "title": "Frontend Engineer", "company": "Acme", "description": "UI work", "seniority": "Mid",
    })
    create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": "React", "importance": 4})
    create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": "Go", "importance": "5"})

    detail = client.get(f"/jobs/{job['id']}", headers=alice_headers)

    assert detail.status_code == 200
    body = detail.json()
    assert body["title"] == "Frontend Engineer"
    assert [r["name"] for r in body["required_skills"]] == ["React", "Go"]
    assert [
        (g["name"], g["importance"], g["observed_level"], g["gap"], g["classification"]) for g in body["gaps"]
    ] == [
        ("React", 4, 2, 2, "slight gap"),
        ("Go", 5, 0, 5, "big gap"),
    ]


@pytest.mark.api
def test_job_detail_resolves_job_once(client, app, alice_headers, monkeypatch):
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})
    create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": "Go", "importance": 3})
    guard = app.state.guards["job"]
    lookups = []
    real_find = guard.scoped_find

    def counting_find(*args, **kwargs):
        lookups.append(args)
        return real_find(*args, **kwargs)

    monkeypatch.setattr(guard, "scoped_find", counting_find)

    detail = client.get(f"/jobs/{job['id']}", headers=alice_headers)

    assert detail.status_code == 200
    assert [r["name"] for r in detail.json()["required_skills"]] == ["Go"]
    assert len(lookups) == 1


@pytest.mark.api
def test_gap_analysis_ignores_other_users_skills(client, alice_headers, bob_headers):
    create(client, "/skills", bob_headers, {"name": "Go", "level": 5})
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})
    create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": "Go", "importance": 3})

    gaps = client.get(f"/jobs/{job['id']}", headers=alice_headers).json()["gaps"]

    assert gaps[0]["observed_level"] == 0


@pytest.mark.api
def test_foreign_job_detail_is_404(client, alice_headers, bob_headers):
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})

    assert client.get(f"/jobs/{job['id']}", headers=bob_headers).status_code == 404
    assert client.get("/jobs/no-such-id", headers=bob_headers).status_code == 404


@pytest.mark.api
def test_required_skill_on_foreign_job_is_404_and_creates_nothing(client, app, alice_headers, bob_headers):
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})

    response = client.post(
        "/job-required-skills", json={"jobId": job["id"], "name": "Go", "importance": 3}, headers=bob_headers
    )

    assert response.status_code == 404
    assert app.state.guards["job"].required_skills.count_for_job(job["id"]) == 0


@pytest.mark.api
@pytest.mark.parametrize("body", [
    {"name": "Go", "importance": 3},
    {"jobId": "x", "name": "Go", "importance": 9},
    {"jobId": "x", "name": "", "importance": 3},
])
def test_required_skill_validation(client, alice_headers, body):
    assert client.post("/job-required-skills", json=body, headers=alice_headers).status_code == 400


@pytest.mark.api
def test_delete_required_skill(client, alice_headers, bob_headers):
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})
    child = create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": "Go", "importance": 3})

    assert delete(client, "/job-required-skills", bob_headers, child["id"]).status_code == 404
    assert delete(client, "/job-required-skills", alice_headers, child["id"]).status_code == 200
    assert client.get(f"/jobs/{job['id']}", headers=alice_headers).json()["required_skills"] == []


@pytest.mark.api
def test_deleting_job_removes_required_skills(client, app, alice_headers):
    job = create(client, "/jobs", alice_headers, {"title": "SRE", "description": "Ops"})
    for name in ["Go", "Terraform", "Linux"]:
        create(client, "/job-required-skills", alice_headers, {"jobId": job["id"], "name": name, "importance": 3})

    response = delete(client, "/jobs", alice_headers, job["id"])

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert app.state.guards["job"].required_skills.count_for_job(job["id"]) == 0
    assert client.get(f"/jobs/{job['id']}", headers=alice_headers).status_code == 404


# ============================================================
# GOALS & APPLICATIONS (status updates)
# ============================================================

@pytest.mark.api
def test_goal_defaults_and_status_update(client, alice_headers):
    goal = create(client, "/goals", alice_headers, {"title": "Learn Rust", "description": "The book"})
    assert goal["status"] == "PLANNED"

    response = client.patch("/goals", json={"id": goal["id"], "status": "IN_PROGRESS"}, headers=alice_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "IN_PROGRESS"
    assert response.json()["title"] == "Learn Rust"


@pytest.mark.api
@pytest.mark.parametrize("path, body, status", [
    ("/goals", {"title": "Learn Rust"}, "DONE"),
    ("/applications", {"company": "Acme", "role": "SRE"}, "OFFER"),
])
def test_status_patch_rejects_other_fields(client, alice_headers, path, body, status):
    row = create(client, path, alice_headers, body)

    response = client.patch(path, json={"id": row["id"], "status": status, "title": "Hacked", "company": "Hacked"},
                            headers=alice_headers)

    assert response.status_code == 400
    current = client.get(path, headers=alice_headers).json()[0]
    assert "Hacked" not in current.values()
    assert current["status"] == row["status"]


@pytest.mark.api
def test_status_patch_validation(client, alice_headers):
    goal = create(client, "/goals", alice_headers, {"title": "Learn Rust"})

    assert client.patch("/goals", json={"id": goal["id"], "status": "ABANDONED"}, headers=alice_headers).status_code == 400
    assert client.patch("/goals", json={"status": "DONE"}, headers=alice_headers).status_code == 400


@pytest.mark.api
def test_status_patch_on_foreign_row_is_404(client, alice_headers, bob_headers):
    application = create(client, "/applications", alice_headers, {"company": "Acme", "role": "SRE"})

    response = client.patch("/applications", json={"id": application["id"], "status": "OFFER"}, headers=bob_headers)

    assert response.status_code == 404
    assert client.get("/applications", headers=alice_headers).json()[0]["status"] == "APPLIED"


@pytest.mark.api
def test_application_link_handling(client, alice_headers):
    with_link = create(client, "/applications", alice_headers,
                       {"company": "Acme", "role": "SRE", "link": "https://acme.example/jobs/1"})
    blank_link = create(client, "/applications", alice_headers, {"company": "Initech", "role": "Dev", "link": ""})
    bad_link = client.post("/applications", json={"company": "Hooli", "role": "Dev", "link": "not a url"},
                           headers=alice_headers)

    assert with_link["link"] == "https://acme.example/jobs/1"
    assert with_link["status"] == "APPLIED"
    assert blank_link["link"] is None
    assert bad_link.status_code == 400


# ============================================================
# DASHBOARD
# ============================================================

@pytest.mark.api
def test_dashboard_counts(client, alice_headers, bob_headers):
    create(client, "/skills", alice_headers, {"name": "Go", "level": 3})
    create(client, "/skills", alice_headers, {"name": "SQL", "level": 4})
    for title in ["A", "B", "C", "D"]:
        create(client, "/jobs", alice_headers, {"title": title, "description": "x"})
    create(client, "/goals", alice_headers, {"title": "Open"})
    create(client, "/goals", alice_headers, {"title": "Finished", "status": "DONE"})
    create(client, "/applications", alice_headers, {"company": "Acme", "role": "SRE"})
    create(client, "/skills", bob_headers, {"name": "Java", "level": 5})

    body = client.get("/dashboard", headers=alice_headers).json()

    assert body["counts"] == {"skills": 2, "jobs": 4, "open_goals": 1, "applications": 1}
    assert len(body["recent_jobs"]) == 3
    assert len(body["recent_goals"]) == 2
    assert len(body["recent_applications"]) == 1
