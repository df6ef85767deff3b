class DuplicateEmailError(Exception):
    """Raised by the user repository when the unique email index rejects a row"""
