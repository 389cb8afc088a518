"""Notifications app package.

In-app notifications for the booking lifecycle. Domain events published
after commit are turned into ``Notification`` rows by the handlers in
``handlers.py``; an optional Celery task sends an email copy.
"""
