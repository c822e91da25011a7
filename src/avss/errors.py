"""
Exceptions raised by the AVSS package.

Verification primitives never raise on a cryptographic mismatch, they return
False. The exceptions below signal precondition violations: corrupted input,
protocol misuse, or a failed randomness source.
"""


class AVSSError(Exception):
    """Base class for all AVSS errors."""


class InvalidPointError(AVSSError, ValueError):
    """A point is not on the curve or its encoding is malformed."""


class DuplicateIndexError(AVSSError, ValueError):
    """Two shares in one interpolation set carry the same index."""


class EntropyError(AVSSError):
    """The randomness source could not provide a scalar."""


class ProtocolError(AVSSError):
    """A protocol message is malformed."""


class InvalidStateError(ProtocolError):
    """An operation is not allowed in the node's current state."""


class NotEnoughSharesError(AVSSError):
    """Fewer valid shares than the threshold are available."""


class ReconstructionError(AVSSError):
    """The reconstructed secret does not open the public commitment."""


class AuthenticationError(AVSSError):
    """A session credential was rejected."""
