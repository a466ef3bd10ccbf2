#!/usr/bin/env python
import os
import sys


def main():
    """Run administrative tasks."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "resume_tracker.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Tests never prompt in CI
    if "test" in sys.argv and "--noinput" not in sys.argv:
        ci_env = os.environ.get("CI", "").lower() in ("true", "1")
        github_actions = os.environ.get("GITHUB_ACTIONS", "").lower() in ("true", "1")
        if ci_env or github_actions:
            sys.argv.append("--noinput")

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
