"""Users table."""

from fluentdb.migrations import Migration
from fluentdb.schema import Blueprint, Schema


class CreateUsersTable(Migration):
    def up(self, schema: Schema) -> None:
        def columns(table: Blueprint) -> None:
            table.id()
            table.string("first_name", 100)
            table.string("last_name", 100)
            table.string("email", 150).unique()
            table.string("password")

            table.boolean("active").default(1)
            table.timestamps()
            table.soft_delete()

        schema.create("users", columns)

    def down(self, schema: Schema) -> None:
        schema.drop_if_exists("users")
