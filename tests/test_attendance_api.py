from datetime import date, datetime, timedelta

from emphub.models.attendance import AttendanceRecord


def _add_record(db, employee, day, logged_out=True):
    login = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
    record = AttendanceRecord(
        employee_id=employee.id,
        date=day,
        login_time=login,
        logout_time=login + timedelta(hours=8) if logged_out else None,
    )
    db.add(record)
    db.commit()
    return record


def test_login_and_logout_record_attendance(client, team, auth_headers):
    bde = team["bde"]
    client.post("/api/login", json={"username": bde.username, "password": "secret123"})

    mine = client.get("/api/attendance/me", headers=auth_headers(bde)).json()
    assert len(mine) == 1
    assert mine[0]["logout_time"] is None

    r = client.post("/api/logout", headers=auth_headers(bde))
    assert r.json()["attendance_closed"] is True

    mine = client.get("/api/attendance/me", headers=auth_headers(bde)).json()
    assert mine[0]["logout_time"] is not None

    # nothing left to close
    assert client.post("/api/logout", headers=auth_headers(bde)).json()["attendance_closed"] is False


def test_attendance_is_scoped_by_role(client, team, db, auth_headers):
    today = datetime.utcnow().date()
    for key in ("bde", "bde2", "other_bde", "bdm"):
        _add_record(db, team[key], today)

    def names(user):
        rows = client.get("/api/attendance", headers=auth_headers(team[user])).json()
        return sorted(row["employee_name"] for row in rows)

    assert names("admin") == ["Bob", "Cara", "Carl", "Olga"]
    assert names("manager") == ["Bob", "Cara", "Carl"]
    assert names("bdm") == ["Bob", "Cara", "Carl"]
    assert names("bde") == ["Carl"]


def test_attendance_filters(client, team, db, auth_headers):
    _add_record(db, team["bde"], date(2024, 3, 1))
    _add_record(db, team["bde"], date(2024, 3, 15))
    _add_record(db, team["bde2"], date(2024, 3, 15))
    headers = auth_headers(team["admin"])

    r = client.get("/api/attendance", params={"startDate": "2024-03-10", "endDate": "2024-03-31"}, headers=headers)
    assert len(r.json()) == 2

    r = client.get("/api/attendance", params={"employeeId": team["bde"].id}, headers=headers)
    assert len(r.json()) == 2
    assert r.json()[0]["employee_code"] == team["bde"].employee_id

    r = client.get("/api/attendance", params={"phoneNumber": team["bde2"].mobile}, headers=headers)
    assert [row["employee_name"] for row in r.json()] == ["Cara"]

    r = client.get("/api/attendance", params={"startDate": "2024-03-31", "endDate": "2024-03-01"}, headers=headers)
    assert r.status_code == 400


def test_cannot_view_attendance_outside_team(client, team, auth_headers):
    r = client.get(
        "/api/attendance", params={"employeeId": team["other_bde"].id}, headers=auth_headers(team["manager"])
    )
    assert r.status_code == 403


def test_today_attendance(client, team, db, auth_headers):
    _add_record(db, team["bde"], datetime.utcnow().date(), logged_out=False)
    _add_record(db, team["bde"], date(2024, 1, 1))

    rows = client.get("/api/attendance/today", headers=auth_headers(team["manager"])).json()
    assert len(rows) == 1
    assert rows[0]["employee_name"] == "Carl"
