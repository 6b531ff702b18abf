#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def main():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')
    from django.core.management import execute_from_command_line
    from django.core.management.commands.runserver import Command as runserver

    # `manage.py runserver` listens on PORT unless an address is given
    runserver.default_port = os.getenv('PORT', '5000')
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
