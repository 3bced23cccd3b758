"""
Storage domain exceptions.
"""


class StorageError(Exception):
    """Base exception for storage errors"""
    pass


class DuplicateEmailError(StorageError):
    """Raised when a user account already exists for an email address"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email} already exists")


class FeeNotAllowedError(StorageError):
    """Raised when an update sets a fee on a referral that is not Hired"""

    def __init__(self, referral_id: int, status: str):
        self.referral_id = referral_id
        self.status = status
        super().__init__(f"Referral {referral_id} is {status}; fee_earned can only be set on a Hired referral")
