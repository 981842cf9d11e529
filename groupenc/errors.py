"""Exceptions raised by the group encryption scheme.
"""


class GroupEncryptionError(Exception):
    """Base class for all errors raised by `groupenc`."""


class EncryptionError(GroupEncryptionError):
    """Encryption could not produce a ciphertext."""


class EmptyMessage(EncryptionError):
    """The plaintext vector has no elements."""


class RandomnessFailure(EncryptionError):
    """The randomness source could not produce values.

    Raised from Setup, KeyGen and Encrypt. It is never retried internally.
    """


class DecryptionError(GroupEncryptionError):
    """Decryption could not be carried out."""


class MalformedCiphertext(DecryptionError):
    """The ciphertext has the wrong length or holds an invalid element."""


class DecodeError(GroupEncryptionError, ValueError):
    """Bytes do not canonically encode a valid value of the expected kind."""
