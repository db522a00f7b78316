"""Tests for the fluent query builder."""

from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from fluentdb.core.errors import MalformedQueryError
from fluentdb.query import QueryBuilder
from fluentdb.query import builder as builder_module


def seed_users(db, *emails: str) -> None:
    for i, email in enumerate(emails, start=1):
        db.table("users").insert({"email": email, "name": f"user{i}", "age": 20 + i})


class TestCompileSelect:
    def test_default_select(self, db):
        assert db.table("users").to_sql() == ("SELECT * FROM users", [])

    def test_full_clause_order(self, db):
        sql, params = (
            db.table("users")
            .select(["users.id", "roles.name AS role"])
            .left_join("roles", "roles.id = users.role_id")
            .where("users.active", 1)
            .where("users.age", ">=", 18)
            .order_by("users.id", "desc")
            .limit(10)
            .offset(20)
            .to_sql()
        )
        assert sql == (
            "SELECT users.id, roles.name AS role FROM users "
            "LEFT JOIN roles ON roles.id = users.role_id "
            "WHERE users.active = ? AND users.age >= ? "
            "ORDER BY users.id DESC LIMIT 10 OFFSET 20"
        )
        assert params == [1, 18]

    def test_select_string(self, db):
        sql, _ = db.table("users").select("COUNT(*) AS n").to_sql()
        assert sql == "SELECT COUNT(*) AS n FROM users"

    def test_select_empty_list_rejected(self, db):
        with pytest.raises(MalformedQueryError):
            db.table("users").select([])

    def test_join_kinds(self, db):
        sql, _ = (
            db.table("a")
            .join("b", "b.a_id = a.id")
            .right_join("c", "c.a_id = a.id")
            .join("d", "d.a_id = a.id", "cross")
            .to_sql()
        )
        assert sql == (
            "SELECT * FROM a INNER JOIN b ON b.a_id = a.id "
            "RIGHT JOIN c ON c.a_id = a.id CROSS JOIN d ON d.a_id = a.id"
        )

    def test_order_by_last_call_wins(self, db):
        sql, _ = db.table("t").order_by("a").order_by("b", "DESC").to_sql()
        assert sql == "SELECT * FROM t ORDER BY b DESC"

    def test_table_required(self, db):
        with pytest.raises(MalformedQueryError):
            QueryBuilder(db, " ")


class TestWhereShapes:
    def test_raw_fragment_adds_no_params(self, db):
        sql, params = db.table("users").where("deleted_at = 0").to_sql()
        assert sql == "SELECT * FROM users WHERE deleted_at = 0"
        assert params == []

    def test_two_argument_form_is_equality(self, db):
        sql, params = db.table("users").where("email", "a@b.c").to_sql()
        assert sql == "SELECT * FROM users WHERE email = ?"
        assert params == ["a@b.c"]

    def test_three_argument_form(self, db):
        sql, params = db.table("users").where("age", "<>", 3).to_sql()
        assert sql == "SELECT * FROM users WHERE age <> ?"
        assert params == [3]

    def test_none_is_bound_as_a_value(self, db):
        sql, params = db.table("users").where("name", None).to_sql()
        assert sql == "SELECT * FROM users WHERE name = ?"
        assert params == [None]

    def test_where_raw_with_params(self, db):
        sql, params = (
            db.table("users")
            .where("active", 1)
            .where_raw("(email = ? OR name = ?)", ["a@b.c", "bob"])
            .to_sql()
        )
        assert sql == "SELECT * FROM users WHERE active = ? AND (email = ? OR name = ?)"
        assert params == [1, "a@b.c", "bob"]

    @pytest.mark.parametrize(
        "calls",
        [
            [("a", 1)],
            [("a", 1), ("b", ">", 2), ("c = 3",)],
            [("x = 1",), ("y", "LIKE", "%z%"), ("w", None), ("v", "<=", 9)],
        ],
    )
    def test_placeholder_count_matches_params(self, db, calls):
        builder = db.table("t")
        for args in calls:
            builder.where(*args)
        sql, params = builder.to_sql()
        assert sql.count("?") == len(params)

    def test_params_preserve_call_order(self, db):
        builder = db.table("t").where("a", 1).where("b", ">", 2).where("c", "x")
        assert builder.params == [1, 2, "x"]


class TestValidation:
    @pytest.mark.parametrize("value", [-1, 1.5, "10", True, None])
    def test_limit_must_be_non_negative_int(self, db, value):
        with pytest.raises(MalformedQueryError):
            db.table("t").limit(value)

    def test_offset_must_be_non_negative_int(self, db):
        with pytest.raises(MalformedQueryError):
            db.table("t").offset(-5)

    def test_limit_zero_allowed(self, db):
        assert db.table("t").limit(0).to_sql()[0] == "SELECT * FROM t LIMIT 0"

    def test_bad_direction(self, db):
        with pytest.raises(MalformedQueryError, match="ASC or DESC"):
            db.table("t").order_by("a", "sideways")

    def test_empty_insert(self, users_db):
        with pytest.raises(MalformedQueryError):
            users_db.table("users").insert({})

    def test_empty_update(self, users_db):
        with pytest.raises(MalformedQueryError):
            users_db.table("users").update({})

    @pytest.mark.parametrize("params", ["abc", b"abc"])
    def test_where_raw_rejects_string_params(self, db, params):
        builder = db.table("t")
        with pytest.raises(MalformedQueryError, match="sequence of values"):
            builder.where_raw("a = ?", params)
        assert builder.to_sql() == ("SELECT * FROM t", [])


class TestReset:
    def test_reset_clears_clauses_but_keeps_table(self, db):
        builder = db.table("users").select("id").where("a", 1).order_by("id").limit(5)
        builder.reset()
        assert builder.table == "users"
        assert builder.to_sql() == ("SELECT * FROM users", [])


class TestReads:
    def test_get_returns_all_rows(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        rows = users_db.table("users").select(["email"]).order_by("id").get()
        assert rows == [{"email": "a@x.io"}, {"email": "b@x.io"}]

    def test_get_on_empty_table(self, users_db):
        assert users_db.table("users").get() == []

    def test_first_returns_none_when_nothing_matches(self, users_db):
        assert users_db.table("users").where("email", "nobody@x.io").first() is None

    def test_first_returns_first_row(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        row = users_db.table("users").order_by("id", "DESC").first()
        assert row["email"] == "b@x.io"

    def test_first_does_not_change_builder(self, users_db):
        builder = users_db.table("users").where("age", ">", 0)
        before = builder.to_sql()
        builder.first()
        assert builder.to_sql() == before

    def test_exists(self, users_db):
        seed_users(users_db, "a@x.io")
        assert users_db.table("users").where("email", "a@x.io").exists() is True
        assert users_db.table("users").where("email", "z@x.io").exists() is False

    def test_join_query(self, users_db):
        users_db.execute("CREATE TABLE roles (id INTEGER PRIMARY KEY, user_id INT, name TEXT)")
        seed_users(users_db, "a@x.io", "b@x.io")
        users_db.table("roles").insert({"id": 1, "user_id": 2, "name": "admin"})

        rows = (
            users_db.table("users")
            .select(["users.email", "roles.name AS role"])
            .left_join("roles", "roles.user_id = users.id")
            .order_by("users.id")
            .get()
        )
        assert rows == [
            {"email": "a@x.io", "role": None},
            {"email": "b@x.io", "role": "admin"},
        ]

    def test_pagination(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io", "c@x.io")
        rows = users_db.table("users").select("email").order_by("id").limit(1).offset(1).get()
        assert rows == [{"email": "b@x.io"}]


class TestWrites:
    def test_insert_returns_generated_id(self, users_db):
        first = users_db.table("users").insert({"email": "a@x.io"})
        second = users_db.table("users").insert({"email": "b@x.io"})
        assert (first, second) == (1, 2)

    def test_insert_then_first_round_trip(self, users_db):
        users_db.table("users").insert({"email": "a@x.io", "age": 2})
        row = users_db.table("users").where("email", "a@x.io").first()
        assert row["age"] == 2

    def test_column_defaults_apply(self, users_db):
        users_db.table("users").insert({"email": "a@x.io"})
        row = users_db.table("users").first()
        assert row["status"] == "new"
        assert row["active"] == 1
        assert row["name"] is None

    def test_update_scoped(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        assert users_db.table("users").where("email", "a@x.io").update({"status": "x"}) is True
        statuses = [r["status"] for r in users_db.table("users").order_by("id").get()]
        assert statuses == ["x", "new"]

    def test_update_binds_set_before_where(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        users_db.table("users").where("age", ">", 21).update({"name": "older"})
        names = [r["name"] for r in users_db.table("users").order_by("id").get()]
        assert names == ["user1", "older"]

    def test_update_without_where_changes_every_row(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io", "c@x.io")
        users_db.table("users").update({"status": "x"})
        assert {r["status"] for r in users_db.table("users").get()} == {"x"}

    def test_delete_scoped(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        assert users_db.table("users").where("email", "a@x.io").delete() is True
        assert [r["email"] for r in users_db.table("users").get()] == ["b@x.io"]

    def test_delete_without_where_removes_every_row(self, users_db):
        seed_users(users_db, "a@x.io", "b@x.io")
        users_db.table("users").delete()
        assert users_db.table("users").get() == []

    def test_values_are_never_interpolated(self, users_db):
        hostile = "x'); DROP TABLE users; --"
        users_db.table("users").insert({"email": hostile})
        assert users_db.table("users").where("email", hostile).first()["email"] == hostile


@pytest.fixture
def write_logs(monkeypatch):
    """Structlog events emitted by the builder during the test."""
    # A module logger proxy stays bound to whatever config was active when it first logged.
    monkeypatch.setattr(builder_module, "logger", structlog.get_logger(builder_module.__name__))
    with capture_logs() as logs:
        yield logs


def unscoped_events(logs):
    return [entry for entry in logs if entry["event"] == "query.unscoped_write"]


class TestUnscopedWriteWarning:
    def test_update_without_where_warns(self, users_db, write_logs):
        seed_users(users_db, "a@x.io")
        users_db.table("users").update({"status": "x"})
        (event,) = unscoped_events(write_logs)
        assert event["log_level"] == "warning"
        assert event["operation"] == "update"
        assert event["table"] == "users"

    def test_delete_without_where_warns(self, users_db, write_logs):
        users_db.table("users").delete()
        (event,) = unscoped_events(write_logs)
        assert event["operation"] == "delete"

    def test_every_unscoped_write_warns(self, users_db, write_logs):
        users_db.table("users").delete()
        users_db.table("users").delete()
        assert len(unscoped_events(write_logs)) == 2

    def test_scoped_writes_do_not_warn(self, users_db, write_logs):
        seed_users(users_db, "a@x.io")
        users_db.table("users").where("email", "a@x.io").update({"status": "x"})
        users_db.table("users").where_raw("age > ?", [100]).delete()
        assert unscoped_events(write_logs) == []
