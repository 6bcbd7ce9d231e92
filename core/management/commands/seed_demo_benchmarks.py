"""Seed a deterministic demo benchmark project (idempotent)."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from core.demo import DEMO_PROJECT, seed_demo_project


class Command(BaseCommand):
    """Create the demo project and its benchmark rows when missing."""

    help = "Create a demo benchmark project with deterministic rows (idempotent)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: report what would be created without writing.",
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Write changes to the database.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        check: bool = options["check"]
        write: bool = options["write"]

        if check and write:
            raise CommandError("Use either --check or --write, not both.")
        if not check and not write:
            raise CommandError("Refusing to write without explicit intent; pass --check or --write.")

        result = seed_demo_project(write=write)
        mode = "CHECK" if check else "WRITE"
        if result.seeded:
            summary = f"created project {DEMO_PROJECT!r} with {result.created_rows} rows"
        elif result.created_rows:
            summary = f"would create project {DEMO_PROJECT!r} with {result.created_rows} rows"
        else:
            summary = f"project {DEMO_PROJECT!r} already exists"
        self.stdout.write(f"[{mode}] {summary}")
        return None
