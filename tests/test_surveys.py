import pytest

from sponsor_hub.crud import surveys as survey_store
from sponsor_hub.crud import sponsors as sponsor_store
from sponsor_hub.models.survey import Survey, SurveySponsor
from sponsor_hub.models.user import UserPermissions

SURVEY = {
    "name": "Gemian",
    "github_id": "gemian-gh",
    "priorities": "Simple priorities",
    "issues": "github.com/gemian/issues/2",
    "comms_frequency": "Anything goes",
    "pre_release": True,
    "privacy": "NayBother",
}


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", name="Owner")


@pytest.fixture
def owned_survey(db, owner):
    survey = Survey(user_id=owner.id, **SURVEY)
    survey_store.insert_survey(db, survey)
    return survey


def test_add_survey(client, db, owner, auth_headers):
    response = client.post("/api/surveys", json=SURVEY, headers=auth_headers(owner))
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == 201
    assert body["message"] == "Survey created successfully"

    saved = survey_store.load_survey(db, body["resource_id"])
    assert saved.user_id == owner.id
    assert saved.github_id == "gemian-gh"
    assert saved.pre_release is True


def test_add_survey_ignores_owner_in_body(client, db, owner, make_user, auth_headers):
    other = make_user("other@example.com")
    response = client.post(
        "/api/surveys",
        json={**SURVEY, "user_id": other.id, "id": 999},
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    assert survey_store.load_survey(db, response.json()["resource_id"]).user_id == owner.id


def test_second_survey_conflicts(client, owner, owned_survey, auth_headers):
    response = client.post("/api/surveys", json=SURVEY, headers=auth_headers(owner))
    assert response.status_code == 409


def test_load_own_survey(client, owner, owned_survey, auth_headers):
    for survey_id in (0, owned_survey.id):
        response = client.get(f"/api/surveys/{survey_id}", headers=auth_headers(owner))
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == owned_survey.id
        assert body["user_id"] == owner.id
        for key, value in SURVEY.items():
            assert body[key] == value


def test_load_own_survey_when_none_exists(client, owner, auth_headers):
    response = client.get("/api/surveys/0", headers=auth_headers(owner))
    assert response.status_code == 404


def test_load_someone_elses_survey(client, make_user, owned_survey, auth_headers):
    stranger = make_user("stranger@example.com")
    editor = make_user("editor@example.com", permissions=UserPermissions.EDITOR)

    response = client.get(f"/api/surveys/{owned_survey.id}", headers=auth_headers(stranger))
    assert response.status_code == 403

    response = client.get(f"/api/surveys/{owned_survey.id}", headers=auth_headers(editor))
    assert response.status_code == 200


def test_load_missing_survey(client, owner, auth_headers):
    response = client.get("/api/surveys/12345", headers=auth_headers(owner))
    assert response.status_code == 404


def test_surveys_list_requires_editor(client, owner, make_user, owned_survey, auth_headers):
    response = client.get("/api/surveys", headers=auth_headers(owner))
    assert response.status_code == 403
    assert response.json()["detail"] == "User is not an editor"

    editor = make_user("editor@example.com", permissions=UserPermissions.EDITOR)
    response = client.get("/sponsor-hub/api/surveys", headers=auth_headers(editor))
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [owned_survey.id]


def test_update_survey(client, db, owner, owned_survey, auth_headers):
    changes = {**SURVEY, "priorities": "Changed priorities", "pre_release": False}
    response = client.put(
        f"/api/surveys/{owned_survey.id}", json=changes, headers=auth_headers(owner)
    )
    assert response.status_code == 200
    assert response.json()["resource_id"] == owned_survey.id

    db.expire_all()
    saved = survey_store.load_survey(db, owned_survey.id)
    assert saved.priorities == "Changed priorities"
    assert saved.pre_release is False
    assert saved.user_id == owner.id


def test_update_replaces_every_field(client, db, owner, owned_survey, auth_headers):
    response = client.put(
        f"/api/surveys/{owned_survey.id}", json={"name": "Only name"}, headers=auth_headers(owner)
    )
    assert response.status_code == 200

    db.expire_all()
    saved = survey_store.load_survey(db, owned_survey.id)
    assert saved.name == "Only name"
    assert saved.github_id == ""
    assert saved.privacy == ""


def test_update_someone_elses_survey(client, db, make_user, owned_survey, auth_headers):
    editor = make_user("editor@example.com", permissions=UserPermissions.EDITOR)
    response = client.put(
        f"/api/surveys/{owned_survey.id}",
        json={**SURVEY, "name": "Hijacked"},
        headers=auth_headers(editor),
    )
    assert response.status_code == 403

    admin = make_user("admin@example.com", permissions=UserPermissions.ADMIN)
    response = client.put(
        f"/api/surveys/{owned_survey.id}",
        json={**SURVEY, "name": "Moderated"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200

    db.expire_all()
    assert survey_store.load_survey(db, owned_survey.id).name == "Moderated"


def test_update_missing_survey(client, owner, auth_headers):
    response = client.put("/api/surveys/12345", json=SURVEY, headers=auth_headers(owner))
    assert response.status_code == 404


def test_delete_survey_removes_sponsors(client, db, owner, make_user, owned_survey, auth_headers):
    survey_id = owned_survey.id
    editor = make_user("editor@example.com", permissions=UserPermissions.EDITOR)
    sponsor_store.insert_survey_sponsor(
        db, SurveySponsor(survey_id=survey_id, user_id=editor.id)
    )

    response = client.delete(f"/api/surveys/{survey_id}", headers=auth_headers(editor))
    assert response.status_code == 403

    response = client.delete(f"/api/surveys/{survey_id}", headers=auth_headers(owner))
    assert response.status_code == 200

    # drop stale objects so the checks below hit the database
    db.expunge_all()
    assert survey_store.load_survey(db, survey_id) is None
    assert sponsor_store.sponsors_for_survey_id(db, survey_id) == []


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/surveys/99999999999999999999999"),
    ("GET", "/api/surveys/-1"),
    ("PUT", "/api/surveys/99999999999999999999999"),
    ("DELETE", "/api/surveys/99999999999999999999999"),
    ("GET", "/api/surveys/99999999999999999999999/sponsors"),
    ("DELETE", "/api/surveys/1/sponsors/99999999999999999999999"),
    ("GET", "/api/users/99999999999999999999999"),
    ("GET", "/api/users/99999999999999999999999/sponsored-surveys"),
])
def test_out_of_range_ids_are_bad_requests(client, owner, auth_headers, method, path):
    kwargs = {"json": SURVEY} if method == "PUT" else {}
    response = client.request(method, path, headers=auth_headers(owner), **kwargs)
    assert response.status_code == 400


def test_out_of_range_sponsor_id_is_bad_request(client, make_user, owned_survey, auth_headers):
    editor = make_user("editor@example.com", permissions=UserPermissions.EDITOR)
    response = client.post(
        f"/api/surveys/{owned_survey.id}/sponsors",
        json={"user_id": 99999999999999999999999},
        headers=auth_headers(editor),
    )
    assert response.status_code == 400
