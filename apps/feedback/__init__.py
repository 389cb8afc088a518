"""Feedback app package.

One rating and comment per completed booking, left by the booking's
owner, plus yearly rating statistics for administrators.
"""
