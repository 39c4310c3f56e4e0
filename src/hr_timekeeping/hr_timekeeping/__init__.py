"""HR Timekeeping package.

Feature modules (clock, attendance, absences, ...) each carry a domain model,
a repository interface with its MySQL implementation, a service and a thin
Flask controller. Services are wired together in ``container.py``.
"""
