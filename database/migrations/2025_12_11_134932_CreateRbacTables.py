"""Roles, permissions and their link tables."""

from fluentdb.migrations import Migration
from fluentdb.schema import Blueprint, Schema


def named(table: Blueprint) -> None:
    table.id()
    table.string("name", 50).unique()
    table.string("description").nullable()


class CreateRbacTables(Migration):
    def up(self, schema: Schema) -> None:
        schema.create("roles", named)
        schema.create("permissions", named)

        def user_roles(table: Blueprint) -> None:
            table.id()
            table.integer("user_id")
            table.integer("role_id")

        def role_permissions(table: Blueprint) -> None:
            table.id()
            table.integer("role_id")
            table.integer("permission_id")

        schema.create("user_roles", user_roles)
        schema.create("role_permissions", role_permissions)

    def down(self, schema: Schema) -> None:
        for table in ("role_permissions", "user_roles", "permissions", "roles"):
            schema.drop_if_exists(table)
