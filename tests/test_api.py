from strengthlab.extensions import db
from tests.factories import FULL_TEST, complete_testing, complete_training, find_session, make_user


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_complete_session_requires_token(client, block):
    response = client.post(f"/api/sessions/{block.sessions[0].id}/complete")

    assert response.status_code == 401


def test_complete_session_returns_award_and_stats(client, student, block, auth_headers):
    first = find_session(block, 3, number=1)
    second = find_session(block, 3, number=2)
    complete_training(student, first)
    complete_training(student, second)
    client.post(f"/api/sessions/{first.id}/complete", headers=auth_headers(student))

    response = client.post(f"/api/sessions/{second.id}/complete", headers=auth_headers(student))

    assert response.status_code == 200
    body = response.get_json()
    assert body["xp_awarded"] == 4
    assert body["bonus_xp"] == 3
    assert [t["source"] for t in body["transactions"]] == [
        "Training Session Completed",
        "Weekly Training Bonus",
    ]
    assert body["stats"]["total_xp"] == 11
    assert body["stats"]["sessions_completed"] == 2


def test_complete_unknown_session(client, student, block, auth_headers):
    response = client.post("/api/sessions/9999/complete", headers=auth_headers(student))

    assert response.status_code == 404
    assert response.get_json() == {"msg": "Session 9999 not found"}


def test_token_for_deleted_user(client, block, auth_headers):
    ghost = make_user("ghost")
    headers = auth_headers(ghost)
    db.session.delete(ghost)
    db.session.commit()

    response = client.get("/api/xp/summary", headers=headers)

    assert response.status_code == 404


def test_xp_summary_and_levels(client, student, block, auth_headers):
    session = find_session(block, 1, number=1)
    complete_training(student, session)
    client.post(f"/api/sessions/{session.id}/complete", headers=auth_headers(student))

    summary = client.get("/api/xp/summary", headers=auth_headers(student)).get_json()
    levels = client.get("/api/xp/levels", headers=auth_headers(student)).get_json()

    assert summary["total_xp"] == 4
    assert summary["current_level"] == 2
    assert summary["recent_transactions"][0]["source"] == "Training Session Completed"
    assert levels["current_level"] == 2
    assert [row["is_completed"] for row in levels["levels"]] == [True, False, False, False, False]


def test_stats_endpoint(client, student, block, auth_headers):
    complete_training(student, find_session(block, 1, number=1))

    body = client.get("/api/stats", headers=auth_headers(student)).get_json()

    assert body["sessions_completed"] == 1
    assert body["sessions_available"] == 18
    assert body["consistency_score"] == 5.56


def test_testing_progress_flow(client, student, block, auth_headers):
    testing = find_session(block, 5, "testing")
    complete_testing(student, testing)

    response = client.post(
        f"/api/sessions/{testing.id}/testing-progress",
        json={"standing_long_jump": 150.0, "notes": "ignored"},
        headers=auth_headers(student),
    )
    assert response.status_code == 200
    assert response.get_json() == {"updated": True}

    rows = client.get("/api/progress", headers=auth_headers(student)).get_json()
    assert rows[0]["test_type"] == "standing_long_jump"
    assert rows[0]["percentage_increase"] == 0.0


def test_testing_progress_rejects_bad_payload(client, student, block, auth_headers):
    testing = find_session(block, 5, "testing")

    response = client.post(
        f"/api/sessions/{testing.id}/testing-progress",
        json={"standing_long_jump": "far"},
        headers=auth_headers(student),
    )

    assert response.status_code == 400
    assert "standing_long_jump" in response.get_json()["errors"]


def test_progress_is_for_students_only(client, block, auth_headers):
    coach = make_user("coach", role="admin")

    response = client.get("/api/progress", headers=auth_headers(coach))

    assert response.status_code == 403


def test_leaderboards(client, student, other_student, block, auth_headers):
    session = find_session(block, 1, number=1)
    complete_training(other_student, session)
    client.post(f"/api/sessions/{session.id}/complete", headers=auth_headers(other_student))

    consistency = client.get("/api/leaderboard/consistency", headers=auth_headers(student)).get_json()
    strength = client.get("/api/leaderboard/strength?limit=1", headers=auth_headers(student)).get_json()

    assert [row["username"] for row in consistency] == ["sara", "ali"]
    assert consistency[1]["is_you"] is True
    assert [row["username"] for row in strength] == ["sara", "ali"]
    assert strength[1]["next_level_info"]["next_level"] == 1


def test_repeated_complete_does_not_farm_xp(client, student, block, auth_headers):
    session = find_session(block, 3, number=1)
    complete_training(student, session)

    bodies = [
        client.post(f"/api/sessions/{session.id}/complete", headers=auth_headers(student)).get_json()
        for _ in range(5)
    ]

    assert [body["stats"]["total_xp"] for body in bodies] == [4, 4, 4, 4, 4]
    assert [body["xp_awarded"] for body in bodies] == [4, 0, 0, 0, 0]


def test_testing_submissions_keep_the_first_baseline(client, student, block, auth_headers):
    week_five = find_session(block, 5, "testing")
    week_eleven = find_session(block, 11, "testing")
    first = {metric: 100.0 for metric in FULL_TEST}
    second = {metric: 150.0 for metric in FULL_TEST}

    client.post(f"/api/sessions/{week_five.id}/testing-progress", json=first, headers=auth_headers(student))
    client.post(f"/api/sessions/{week_eleven.id}/testing-progress", json=second, headers=auth_headers(student))

    rows = client.get("/api/progress", headers=auth_headers(student)).get_json()
    jump = rows[0]
    assert (jump["test_type"], jump["baseline_value"], jump["current_value"], jump["percentage_increase"]) == (
        "standing_long_jump", 100.0, 150.0, 50.0,
    )

    # the stored submission now earns testing XP, once
    award = client.post(f"/api/sessions/{week_five.id}/complete", headers=auth_headers(student)).get_json()
    again = client.post(f"/api/sessions/{week_five.id}/complete", headers=auth_headers(student)).get_json()
    assert award["xp_awarded"] == 8
    assert again["xp_awarded"] == 0
