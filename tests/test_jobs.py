import pytest

from townhub.models.user import User
from townhub.services.progression import (
    MAX_LEVEL,
    apply_experience,
    xp_for_level,
    xp_needed_for_next_level,
)


class TestProgression:
    @pytest.mark.parametrize(
        "level, xp", [(1, 0), (2, 100), (3, 500), (4, 900), (10, 5400)]
    )
    def test_xp_for_level(self, level, xp):
        assert xp_for_level(level) == xp

    def test_needed_for_next_level(self):
        assert xp_needed_for_next_level(1) == 100
        assert xp_needed_for_next_level(MAX_LEVEL) == 0

    def test_gain_can_skip_levels(self):
        assert apply_experience(1, 0, 550) == (550, 3)

    def test_level_is_capped(self):
        assert apply_experience(9, 5000, 100000) == (105000, MAX_LEVEL)

    def test_small_gain_keeps_level(self):
        assert apply_experience(2, 100, 10) == (110, 2)


class TestJobCrud:
    def test_teacher_creates_job(self, client, teacher, headers_for):
        response = client.post(
            "/api/jobs/",
            json={"name": "Nurse", "salary": 6000, "location": "Clinic"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Nurse"

    def test_duplicate_name(self, client, teacher, make_job, headers_for):
        make_job(name="Nurse")
        response = client.post(
            "/api/jobs/", json={"name": "Nurse"}, headers=headers_for(teacher)
        )
        assert response.status_code == 400
        assert response.json() == {"error": "A job with this name already exists"}

    def test_student_cannot_create(self, client, student, headers_for):
        response = client.post(
            "/api/jobs/", json={"name": "Nurse"}, headers=headers_for(student)
        )
        assert response.status_code == 403

    def test_list_and_get(self, client, student, make_job, headers_for):
        job = make_job(name="Architect")
        make_job(name="Teacher")
        listing = client.get("/api/jobs/", headers=headers_for(student))
        assert [j["name"] for j in listing.json()] == ["Architect", "Teacher"]

        single = client.get(f"/api/jobs/{job.id}", headers=headers_for(student))
        assert single.status_code == 200
        assert single.json()["id"] == job.id

    def test_collection_without_trailing_slash(self, client, teacher, headers_for):
        created = client.post(
            "/api/jobs", json={"name": "Nurse"}, headers=headers_for(teacher)
        )
        assert created.status_code == 201

        listing = client.get("/api/jobs", headers=headers_for(teacher))
        assert listing.status_code == 200
        assert [j["name"] for j in listing.json()] == ["Nurse"]

    def test_missing_job(self, client, student, headers_for):
        response = client.get("/api/jobs/999", headers=headers_for(student))
        assert response.status_code == 404
        assert response.json() == {"error": "Job not found"}

    def test_update(self, client, super_admin, make_job, headers_for):
        job = make_job(name="Architect")
        response = client.put(
            f"/api/jobs/{job.id}", json={"salary": 9000}, headers=headers_for(super_admin)
        )
        assert response.status_code == 200
        assert response.json()["salary"] == 9000
        assert response.json()["name"] == "Architect"

    def test_delete_clears_holders(self, client, db, teacher, student, make_job, headers_for):
        job = make_job(name="Architect")
        student.job_id = job.id
        db.commit()

        response = client.delete(f"/api/jobs/{job.id}", headers=headers_for(teacher))
        assert response.status_code == 204

        db.expire_all()
        assert db.get(User, student.id).job_id is None


class TestApplications:
    def test_apply_once(self, client, student, make_job, headers_for):
        job = make_job()
        payload = {"answers": {"why": "I like computers"}}
        first = client.post(f"/api/jobs/{job.id}/apply", json=payload, headers=headers_for(student))
        assert first.status_code == 201
        assert first.json()["status"] == "pending"

        again = client.post(f"/api/jobs/{job.id}/apply", json=payload, headers=headers_for(student))
        assert again.status_code == 400
        assert again.json() == {"error": "You have already applied to this job"}

    def test_teacher_sees_only_own_school(
        self, client, teacher, student, other_school, make_user, make_job, headers_for
    ):
        job = make_job()
        stranger = make_user(school=other_school, username="stranger")
        for applicant in (student, stranger):
            client.post(
                f"/api/jobs/{job.id}/apply",
                json={"answers": {}},
                headers=headers_for(applicant),
            )
        response = client.get("/api/jobs/applications", headers=headers_for(teacher))
        assert response.status_code == 200
        assert [a["user_id"] for a in response.json()] == [student.id]

    def test_approval_assigns_job(self, client, db, teacher, student, make_job, headers_for):
        job = make_job()
        application = client.post(
            f"/api/jobs/{job.id}/apply", json={"answers": {}}, headers=headers_for(student)
        ).json()

        response = client.put(
            f"/api/jobs/applications/{application['id']}",
            json={"status": "approved"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 200
        assert response.json()["reviewed_by"] == teacher.id

        db.expire_all()
        assert db.get(User, student.id).job_id == job.id

    def test_invalid_review_status(self, client, teacher, student, make_job, headers_for):
        job = make_job()
        application = client.post(
            f"/api/jobs/{job.id}/apply", json={"answers": {}}, headers=headers_for(student)
        ).json()
        response = client.put(
            f"/api/jobs/applications/{application['id']}",
            json={"status": "maybe"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 400


class TestAssignment:
    def test_assign_and_unassign(self, client, teacher, student, make_job, headers_for):
        job = make_job()
        assigned = client.post(
            "/api/jobs/assign",
            json={"user_id": student.id, "job_id": job.id},
            headers=headers_for(teacher),
        )
        assert assigned.status_code == 200
        assert assigned.json()["job_id"] == job.id

        removed = client.delete(f"/api/jobs/assign/{student.id}", headers=headers_for(teacher))
        assert removed.status_code == 200
        assert removed.json() == {"message": "Job assignment removed successfully"}

    def test_cannot_assign_other_school_student(
        self, client, teacher, other_school, make_user, make_job, headers_for
    ):
        job = make_job()
        stranger = make_user(school=other_school, username="stranger")
        response = client.post(
            "/api/jobs/assign",
            json={"user_id": stranger.id, "job_id": job.id},
            headers=headers_for(teacher),
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Student not found"}
