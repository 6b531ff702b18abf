from django.core.management.base import BaseCommand, CommandError

from apps.core.database import DatabaseUnavailable, connect_db, disconnect_db


class Command(BaseCommand):
    help = 'Verifies that the configured database is reachable'

    def handle(self, *args, **options):
        try:
            connect_db()
        except DatabaseUnavailable as exc:
            raise CommandError(f'Database connection failed: {exc}')
        disconnect_db()
        self.stdout.write(self.style.SUCCESS('Database connected successfully'))
