import pytest

from townhub.models.setting import BankSetting


class TestBankSettings:
    def test_defaults_listed(self, client, teacher, headers_for):
        response = client.get("/api/bank-settings", headers=headers_for(teacher))
        assert response.status_code == 200
        assert response.json() == {
            "wordle_chores_enabled": "true",
            "wordle_game_daily_limit": "3",
        }

    def test_students_cannot_read(self, client, student, headers_for):
        response = client.get("/api/bank-settings/", headers=headers_for(student))
        assert response.status_code == 403

    def test_update(self, client, db, teacher, student, headers_for):
        response = client.put(
            "/api/bank-settings/wordle_chores_enabled",
            json={"value": "False"},
            headers=headers_for(teacher),
        )
        assert response.status_code == 200
        assert response.json() == {
            "message": "Setting updated successfully",
            "key": "wordle_chores_enabled",
            "value": "false",
        }

        row = db.query(BankSetting).filter_by(setting_key="wordle_chores_enabled").one()
        assert row.updated_by == teacher.id

        status = client.get("/api/wordle-game/status", headers=headers_for(student)).json()
        assert status["enabled"] is False

    def test_update_existing_row(self, client, db, teacher, headers_for):
        db.add(BankSetting(setting_key="wordle_game_daily_limit", setting_value="3"))
        db.commit()
        client.put(
            "/api/bank-settings/wordle_game_daily_limit",
            json={"value": "5"},
            headers=headers_for(teacher),
        )
        db.expire_all()
        assert db.query(BankSetting).count() == 1
        assert db.query(BankSetting).one().setting_value == "5"

    @pytest.mark.parametrize(
        "key, value",
        [
            ("wordle_chores_enabled", "maybe"),
            ("wordle_game_daily_limit", "-1"),
            ("wordle_game_daily_limit", "two"),
        ],
    )
    def test_invalid_value(self, client, teacher, headers_for, key, value):
        response = client.put(
            f"/api/bank-settings/{key}", json={"value": value}, headers=headers_for(teacher)
        )
        assert response.status_code == 400

    def test_empty_value(self, client, teacher, headers_for):
        response = client.put(
            "/api/bank-settings/wordle_game_daily_limit",
            json={"value": ""},
            headers=headers_for(teacher),
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "value"

    def test_unknown_key(self, client, teacher, headers_for):
        response = client.put(
            "/api/bank-settings/interest_rate", json={"value": "5"}, headers=headers_for(teacher)
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Setting not found"}
