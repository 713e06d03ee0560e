import pytest

from townhub.core.security import create_user_token
from townhub.models.user import ROLE_STUDENT, ROLE_TEACHER, STATUS_PENDING, User
from tests.conftest import TEST_PASSWORD


def _registration(school_id, **overrides):
    payload = {
        "username": "newkid",
        "password": "hunter22",
        "confirmPassword": "hunter22",
        "school_id": school_id,
        "first_name": "New",
        "last_name": "Kid",
        "class": "6B",
    }
    payload.update(overrides)
    return payload


class TestRegistration:
    def test_lists_active_schools_only(self, client, school, make_school):
        make_school(name="Closed School", code="closed", archived=True)
        response = client.get("/api/auth/schools")
        assert response.status_code == 200
        assert response.json() == [{"id": school.id, "name": "Oak Primary", "code": "oak"}]

    def test_student_registers_as_pending(self, client, db, school):
        response = client.post("/api/auth/register", json=_registration(school.id))
        assert response.status_code == 201
        body = response.json()
        assert body["requires_approval"] is True
        assert "token" not in body

        user = db.query(User).filter(User.username == "newkid").one()
        assert user.status == STATUS_PENDING
        assert user.school_id == school.id
        assert user.class_name == "6B"
        assert user.account is not None
        assert user.account.account_number.startswith("ACC")

    def test_password_mismatch(self, client, school):
        response = client.post(
            "/api/auth/register",
            json=_registration(school.id, confirmPassword="different"),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Passwords do not match"

    def test_teacher_self_registration_rejected(self, client, school):
        response = client.post(
            "/api/auth/register", json=_registration(school.id, role=ROLE_TEACHER)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Teacher registration requires admin authorization"

    def test_username_with_spaces_rejected(self, client, school):
        response = client.post(
            "/api/auth/register", json=_registration(school.id, username="new kid")
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "email", ["a@@b.com", "a@b..com", "a@.com", "x@y.z@w.com", "no-at-sign"]
    )
    def test_invalid_email_rejected(self, client, school, email):
        response = client.post("/api/auth/register", json=_registration(school.id, email=email))
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "email"

    def test_email_is_stored(self, client, db, school):
        response = client.post(
            "/api/auth/register", json=_registration(school.id, email="kid@school.org")
        )
        assert response.status_code == 201
        assert db.query(User).filter(User.username == "newkid").one().email == "kid@school.org"

    def test_blank_email_is_dropped(self, client, db, school):
        response = client.post("/api/auth/register", json=_registration(school.id, email="  "))
        assert response.status_code == 201
        assert db.query(User).filter(User.username == "newkid").one().email is None

    def test_duplicate_username_in_same_school(self, client, school, student):
        response = client.post(
            "/api/auth/register", json=_registration(school.id, username="alex")
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Username already exists"}

    def test_same_username_in_other_school(self, client, other_school, student):
        response = client.post(
            "/api/auth/register", json=_registration(other_school.id, username="alex")
        )
        assert response.status_code == 201

    def test_class_must_be_allowed(self, client, school):
        response = client.post("/api/auth/register", json=_registration(school.id, **{"class": "9Z"}))
        assert response.status_code == 400
        assert response.json()["error"].startswith("Class must be one of")

    def test_archived_school_rejected(self, client, make_school):
        closed = make_school(name="Closed", code="closed", archived=True)
        response = client.post("/api/auth/register", json=_registration(closed.id))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid or inactive school"

    def test_teacher_creates_teacher_in_own_school(self, client, db, teacher, headers_for):
        response = client.post(
            "/api/auth/register-teacher",
            json={"username": "mr_jones", "password": "teach123"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 201
        body = response.json()
        assert body["role"] == ROLE_TEACHER
        assert body["school_id"] == teacher.school_id

    def test_teacher_email_is_validated(self, client, teacher, headers_for):
        response = client.post(
            "/api/auth/register-teacher",
            json={"username": "mr_jones", "password": "teach123", "email": "jones@@school.org"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 400

    def test_student_cannot_create_teacher(self, client, student, headers_for):
        response = client.post(
            "/api/auth/register-teacher",
            json={"username": "mr_jones", "password": "teach123"},
            headers=headers_for(student),
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Insufficient permissions"}


class TestLogin:
    def test_login_returns_token_user_and_account(self, client, student):
        response = client.post(
            "/api/auth/login", json={"username": "alex", "password": TEST_PASSWORD}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["user"]["username"] == "alex"
        assert body["user"]["class"] == "6A"
        assert body["account"]["balance"] == 0

    def test_wrong_password(self, client, student):
        response = client.post(
            "/api/auth/login", json={"username": "alex", "password": "nope"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_pending_student_cannot_login(self, client, make_user, school):
        make_user(role=ROLE_STUDENT, school=school, username="waiting", status=STATUS_PENDING)
        response = client.post(
            "/api/auth/login", json={"username": "waiting", "password": TEST_PASSWORD}
        )
        assert response.status_code == 403

    def test_school_id_disambiguates(self, client, make_user, school, other_school):
        make_user(school=school, username="sam")
        other = make_user(school=other_school, username="sam")
        response = client.post(
            "/api/auth/login",
            json={"username": "sam", "password": TEST_PASSWORD, "school_id": other_school.id},
        )
        assert response.status_code == 200
        assert response.json()["user"]["id"] == other.id

    def test_oauth2_token_form(self, client, teacher):
        response = client.post(
            "/api/auth/token", data={"username": "mrs_smith", "password": TEST_PASSWORD}
        )
        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"


class TestCurrentUser:
    def test_profile(self, client, student, headers_for):
        response = client.get("/api/auth/profile", headers=headers_for(student))
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "alex"
        assert response.json()["account"] is not None

    def test_garbage_token(self, client):
        response = client.get(
            "/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_token_for_deleted_user(self, client, db, student):
        token = create_user_token(student)
        db.delete(student)
        db.commit()
        response = client.get(
            "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_school_mismatch(self, client, db, student, other_school):
        token = create_user_token(student)
        student.school_id = other_school.id
        db.commit()
        response = client.get(
            "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid token - school context mismatch"}
