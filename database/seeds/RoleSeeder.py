"""Baseline roles."""

from fluentdb.core.adapters import DatabaseAdapter
from fluentdb.seeding import Seeder

ROLES = {
    "admin": "Super Administrator",
    "editor": "Content Editor",
}


class RoleSeeder(Seeder):
    def run(self, db: DatabaseAdapter) -> None:
        for name, description in ROLES.items():
            if db.table("roles").where("name", name).exists():
                continue
            db.table("roles").insert({"name": name, "description": description})
