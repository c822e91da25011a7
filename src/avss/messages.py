"""
Protocol messages exchanged during an AVSS session.

The dealer privately sends each participant a Dealing. Participants then run
two broadcast rounds, Echo and Ready, whose messages carry the same
CrossPoints payload: the four values the sender computes about the receiver
from its own restricted polynomials, plus a digest referencing the commitment
matrix both of them hold. Echo and Ready are distinguished only by their
round tag.
"""

from enum import Enum
from typing import NamedTuple
from .commitment import CommitmentMatrix
from .polynomial import UnivariatePolynomial


class Round(Enum):
    ECHO = "echo"
    READY = "ready"


class Dealing(NamedTuple):
    """
    The dealer's private message to participant `index`.

    a and a_prime are f(index, y) and f'(index, y); b and b_prime are
    f(x, index) and f'(x, index).
    """

    index: int
    commitment: CommitmentMatrix
    a: UnivariatePolynomial
    a_prime: UnivariatePolynomial
    b: UnivariatePolynomial
    b_prime: UnivariatePolynomial


class CrossPoints(NamedTuple):
    """
    Values participant `sender` claims about participant `receiver`.

    alpha = f(sender, receiver), alpha_prime = f'(sender, receiver),
    beta = f(receiver, sender), beta_prime = f'(receiver, sender).
    """

    sender: int
    receiver: int
    commitment_digest: bytes
    alpha: int
    alpha_prime: int
    beta: int
    beta_prime: int


class Echo(NamedTuple):
    payload: CrossPoints

    round = Round.ECHO

    @property
    def sender(self) -> int:
        return self.payload.sender

    @property
    def receiver(self) -> int:
        return self.payload.receiver


class Ready(NamedTuple):
    payload: CrossPoints

    round = Round.READY

    @property
    def sender(self) -> int:
        return self.payload.sender

    @property
    def receiver(self) -> int:
        return self.payload.receiver
