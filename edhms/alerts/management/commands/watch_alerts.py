# edhms/alerts/management/commands/watch_alerts.py

import time

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from edhms.alerts.feed import AlertBoard, PollingAlertFeed
from edhms.preferences.config import ConsoleSettings
from edhms.preferences.services import PreferenceService


class Command(BaseCommand):
    help = "Print the alert board and reprint it whenever alerts change."

    def add_arguments(self, parser):
        parser.add_argument("--username", help="Load refresh settings from this user's preferences.")
        parser.add_argument("--status", default="all")
        parser.add_argument("--severity", default="all")
        parser.add_argument("--once", action="store_true", help="Print the board once and exit.")
        parser.add_argument("--iterations", type=int, default=0, help="Stop after N polls (0 = run until interrupted).")
        parser.add_argument("--interval", type=int, default=None, help="Override the polling interval in seconds.")

    def handle(self, *args, **options):
        console = self._settings(options.get("username"))
        interval = options["interval"] if options["interval"] is not None else console.system.refresh_interval

        feed = PollingAlertFeed()
        board = AlertBoard(
            feed,
            status=options["status"],
            severity=options["severity"],
            on_refresh=self._render,
        )
        board.open()
        try:
            if options["once"] or not console.system.auto_refresh:
                return

            feed.poll()  # prime the fingerprint
            polls = 0
            while not options["iterations"] or polls < options["iterations"]:
                time.sleep(interval)
                feed.poll()
                polls += 1
        except KeyboardInterrupt:
            self.stdout.write("Stopped.")
        finally:
            board.close()

    def _settings(self, username) -> ConsoleSettings:
        if not username:
            return ConsoleSettings.defaults()
        user = get_user_model().objects.filter(username=username).first()
        if user is None:
            raise CommandError(f"Unknown user: {username}")
        return PreferenceService.load(user)

    def _render(self, board: AlertBoard) -> None:
        rows = board.visible
        self.stdout.write(self.style.MIGRATE_HEADING(f"Alerts ({len(rows)}) refresh #{board.refresh_count}"))
        for a in rows:
            self.stdout.write(
                f"  [{a.severity.upper():8}] {a.status:12} {a.hospital.name}: {a.title}"
            )
