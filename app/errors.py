# app/errors.py
class QuickCheckError(Exception):
    """Base class for errors raised by the Quick Check app."""


class DatabaseError(QuickCheckError):
    pass


class SettingsError(QuickCheckError):
    pass
