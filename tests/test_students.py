from townhub.models.user import STATUS_APPROVED, STATUS_PENDING, Account, User


class TestPendingStudents:
    def test_pending_list(self, client, teacher, student, make_user, school, headers_for):
        make_user(school=school, username="waiting", status=STATUS_PENDING)
        response = client.get("/api/students/pending", headers=headers_for(teacher))
        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["waiting"]

    def test_status_filter(self, client, teacher, student, make_user, school, headers_for):
        make_user(school=school, username="waiting", status=STATUS_PENDING)
        response = client.get(
            "/api/students/", params={"status": STATUS_APPROVED}, headers=headers_for(teacher)
        )
        assert [u["username"] for u in response.json()] == ["alex"]

    def test_approve(self, client, db, teacher, make_user, school, headers_for):
        pending = make_user(school=school, username="waiting", status=STATUS_PENDING)
        response = client.put(
            f"/api/students/{pending.id}/approve", headers=headers_for(teacher)
        )
        assert response.status_code == 200
        assert response.json()["status"] == STATUS_APPROVED

    def test_approve_twice(self, client, teacher, student, headers_for):
        response = client.put(
            f"/api/students/{student.id}/approve", headers=headers_for(teacher)
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Student is already approved"}

    def test_deny_deletes_user_and_account(self, client, db, teacher, make_user, school, headers_for):
        pending = make_user(school=school, username="waiting", status=STATUS_PENDING)
        pending_id = pending.id
        response = client.put(f"/api/students/{pending_id}/deny", headers=headers_for(teacher))
        assert response.status_code == 200

        db.expire_all()
        assert db.get(User, pending_id) is None
        assert db.query(Account).filter(Account.user_id == pending_id).count() == 0

    def test_other_school_student_is_not_found(
        self, client, teacher, other_school, make_user, headers_for
    ):
        stranger = make_user(school=other_school, username="stranger", status=STATUS_PENDING)
        response = client.put(
            f"/api/students/{stranger.id}/approve", headers=headers_for(teacher)
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Student not found"}

    def test_students_cannot_list(self, client, student, headers_for):
        response = client.get("/api/students/", headers=headers_for(student))
        assert response.status_code == 403

    def test_list_without_trailing_slash(self, client, teacher, student, headers_for):
        response = client.get("/api/students", headers=headers_for(teacher))
        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["alex"]
