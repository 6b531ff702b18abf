from django.core.management.base import BaseCommand
from apps.identity.models import User, UserRole


class Command(BaseCommand):
    help = 'Seeds the database with an admin and a standard demo user'

    def add_arguments(self, parser):
        parser.add_argument('--password', default='password123')

    def handle(self, *args, **options):
        users = [
            {'email': 'admin@example.com', 'name': 'Admin', 'role': UserRole.ADMIN},
            {'email': 'user@example.com', 'name': 'Demo User', 'role': UserRole.USER},
        ]

        for u in users:
            user, created = User.objects.get_or_create(
                email=u['email'],
                defaults={'name': u['name'], 'role': u['role']},
            )

            if created:
                user.set_password(options['password'])
                user.save()
                self.stdout.write(self.style.SUCCESS(f'Created user: {u["email"]} (Role: {u["role"]})'))
            else:
                user.role = u['role']
                user.save(update_fields=['role', 'updated_at'])
                self.stdout.write(self.style.WARNING(f'Updated user: {u["email"]}'))
