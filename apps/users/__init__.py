"""Users app package.

Defines the custom email-login user model used as AUTH_USER_MODEL and the
``admin`` / ``customer`` roles the booking engine turns into actors.
"""
