"""
This module defines the Node class, one participant's view of an AVSS session.

A node moves through the states

    INIT -> AWAITING_DEALER_VERIFICATION -> AWAITING_ECHOES
         -> AWAITING_READYS -> COMPLETE

and ends in ABORTED if the dealer's polynomials do not match the commitment
matrix. After verifying its dealing, a node echoes to every peer the values
its restricted polynomials take at the peer's index. Each incoming Echo or
Ready is checked with verify_point; an invalid one marks its sender faulty
and is dropped without stopping the session. With t valid Echoes the node
starts sending Readys, and with t valid Readys its share is final.

Messages that arrive before the dealing has been verified are queued and
processed once it is. Delivery, ordering across senders and retries belong to
the transport; the node only ignores a repeated message from a sender it has
already heard from in the same round.
"""

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging
import os
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union
from .errors import InvalidStateError, ProtocolError
from .messages import CrossPoints, Dealing, Echo, Ready, Round
from .reconstruction import FinalShare
from .verification import verify_point, verify_poly

logger = logging.getLogger(__name__)

_VERIFY_POOL = ThreadPoolExecutor(max_workers=os.cpu_count())

Message = Union[Echo, Ready]


class NodeState(Enum):
    INIT = "init"
    AWAITING_DEALER_VERIFICATION = "awaiting_dealer_verification"
    AWAITING_ECHOES = "awaiting_echoes"
    AWAITING_READYS = "awaiting_readys"
    COMPLETE = "complete"
    ABORTED = "aborted"


_VERIFIED_STATES = (
    NodeState.AWAITING_ECHOES,
    NodeState.AWAITING_READYS,
    NodeState.COMPLETE,
)


class Node:
    """Class representing an AVSS participant."""

    def __init__(self, index: int, threshold: int, participants: int):
        """
        Initialize a participant waiting for its dealing.

        Parameters:
        index (int): The participant's index, 1 <= index <= participants.
        threshold (int): The number of valid messages needed per round, t.
        participants (int): The total number of participants, n.

        Raises:
        ValueError: If the arguments are not integers or out of range.
        """
        if not all(isinstance(arg, int) for arg in (index, threshold, participants)):
            raise ValueError(
                "All arguments (index, threshold, participants) must be integers."
            )
        if not 1 <= threshold < participants:
            raise ValueError(
                f"Threshold must satisfy 1 <= t < n, got t={threshold}, n={participants}."
            )
        if not 1 <= index <= participants:
            raise ValueError(f"Index must be in [1, {participants}], got {index}.")

        self.index = index
        self.threshold = threshold
        self.participants = participants
        self.state = NodeState.INIT
        self.dealing: Optional[Dealing] = None
        self.received_echoes: Dict[int, Echo] = {}
        self.received_readys: Dict[int, Ready] = {}
        self.faulty: Set[int] = set()
        self._seen: Set[Tuple[Round, int]] = set()
        self._pending: List[Message] = []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self.index}, state={self.state.name})"

    @property
    def peers(self) -> Tuple[int, ...]:
        return tuple(j for j in range(1, self.participants + 1) if j != self.index)

    @property
    def share(self) -> Optional[FinalShare]:
        """The verified share (i, f(i, 0), f'(i, 0)), once the node is COMPLETE."""
        if self.state != NodeState.COMPLETE:
            return None
        return FinalShare(self.index, self.dealing.a[0], self.dealing.a_prime[0])

    def receive_dealing(self, dealing: Dealing) -> None:
        """
        Store the dealer's private message.

        Raises:
        InvalidStateError: If a dealing was already received.
        ProtocolError: If the dealing is addressed to another participant or
        its dimensions do not match the threshold.
        """
        if self.state != NodeState.INIT:
            raise InvalidStateError(f"[{self.index}] dealing received in state {self.state.name}")
        if dealing.index != self.index:
            raise ProtocolError(
                f"[{self.index}] dealing is addressed to participant {dealing.index}"
            )
        if len(dealing.commitment) != self.threshold:
            raise ProtocolError(
                f"[{self.index}] commitment matrix has threshold {len(dealing.commitment)}, "
                f"expected {self.threshold}"
            )

        self.dealing = dealing
        self.state = NodeState.AWAITING_DEALER_VERIFICATION

    def verify_dealing(self) -> bool:
        """
        Check the dealing against the commitment matrix.

        On success the node starts the Echo round and processes any queued
        messages. On failure the dealer is considered malicious and the node
        aborts.

        Returns:
        bool: True if the dealing is consistent with the commitment matrix.

        Raises:
        InvalidStateError: If there is no unverified dealing.
        """
        if self.state != NodeState.AWAITING_DEALER_VERIFICATION:
            raise InvalidStateError(
                f"[{self.index}] no dealing to verify in state {self.state.name}"
            )

        dealing = self.dealing
        if not verify_poly(
            dealing.commitment,
            self.index,
            dealing.a,
            dealing.a_prime,
            dealing.b,
            dealing.b_prime,
        ):
            logger.warning("[%d] dealing does not match commitments, aborting", self.index)
            self.abort()
            return False

        self.state = NodeState.AWAITING_ECHOES
        logger.info("[%d] dealing verified", self.index)

        pending, self._pending = self._pending, []
        self._handle_batch(pending)
        return True

    def abort(self) -> None:
        """Discard the node's polynomials and inboxes and enter ABORTED."""
        self.state = NodeState.ABORTED
        self.dealing = None
        self.received_echoes.clear()
        self.received_readys.clear()
        self._pending.clear()

    def echoes(self) -> Tuple[Echo, ...]:
        """
        Build the Echo for every peer.

        Raises:
        InvalidStateError: If the dealing has not been verified.
        """
        if self.state not in _VERIFIED_STATES:
            raise InvalidStateError(f"[{self.index}] cannot echo in state {self.state.name}")
        return tuple(Echo(self._cross_points(j)) for j in self.peers)

    def readys(self) -> Tuple[Ready, ...]:
        """
        Build the Ready for every peer.

        Raises:
        InvalidStateError: If fewer than t valid Echoes have been received.
        """
        if self.state not in (NodeState.AWAITING_READYS, NodeState.COMPLETE):
            raise InvalidStateError(
                f"[{self.index}] cannot send readys in state {self.state.name}"
            )
        return tuple(Ready(self._cross_points(j)) for j in self.peers)

    def _cross_points(self, receiver: int) -> CrossPoints:
        dealing = self.dealing
        # a_i(j) = f(i, j), b_i(j) = f(j, i)
        return CrossPoints(
            sender=self.index,
            receiver=receiver,
            commitment_digest=dealing.commitment.digest(),
            alpha=dealing.a.evaluate(receiver),
            alpha_prime=dealing.a_prime.evaluate(receiver),
            beta=dealing.b.evaluate(receiver),
            beta_prime=dealing.b_prime.evaluate(receiver),
        )

    def handle_echo(self, echo: Echo) -> bool:
        """
        Process an Echo from a peer.

        Returns:
        bool: True if the Echo was verified and stored, False if it was
        queued, repeated, or invalid.

        Raises:
        ProtocolError: If the message is malformed or misaddressed.
        InvalidStateError: If the node has aborted.
        """
        return self._handle(echo)

    def handle_ready(self, ready: Ready) -> bool:
        """
        Process a Ready from a peer.

        Returns:
        bool: True if the Ready was verified and stored.
        """
        return self._handle(ready)

    def handle_echoes(self, echoes: Iterable[Echo]) -> Tuple[bool, ...]:
        """Process a batch of Echoes, verifying distinct senders in parallel."""
        return self._handle_batch(echoes)

    def handle_readys(self, readys: Iterable[Ready]) -> Tuple[bool, ...]:
        """Process a batch of Readys, verifying distinct senders in parallel."""
        return self._handle_batch(readys)

    def _check_message(self, message: Message) -> None:
        if self.state == NodeState.ABORTED:
            raise InvalidStateError(f"[{self.index}] node has aborted")
        if not isinstance(message, (Echo, Ready)):
            raise ProtocolError(f"[{self.index}] unexpected message {message!r}")
        payload = message.payload
        if payload.receiver != self.index:
            raise ProtocolError(
                f"[{self.index}] message is addressed to participant {payload.receiver}"
            )
        if payload.sender == self.index or not 1 <= payload.sender <= self.participants:
            raise ProtocolError(f"[{self.index}] invalid sender index {payload.sender}")

    def _verify(self, message: Message) -> bool:
        payload = message.payload
        commitment = self.dealing.commitment
        if payload.commitment_digest != commitment.digest():
            return False
        return verify_point(
            commitment,
            payload.sender,
            payload.receiver,
            payload.alpha,
            payload.alpha_prime,
            payload.beta,
            payload.beta_prime,
        )

    def _handle(self, message: Message, verified: Optional[bool] = None) -> bool:
        self._check_message(message)

        if self.state not in _VERIFIED_STATES:
            self._pending.append(message)
            logger.debug(
                "[%d] queued %s from %d until the dealing is verified",
                self.index,
                message.round.value,
                message.sender,
            )
            return False

        key = (message.round, message.sender)
        if key in self._seen:
            logger.debug(
                "[%d] ignoring repeated %s from %d",
                self.index,
                message.round.value,
                message.sender,
            )
            return False
        self._seen.add(key)

        if verified is None:
            verified = self._verify(message)
        if not verified:
            self.faulty.add(message.sender)
            logger.warning(
                "[%d] invalid %s from %d, marking sender faulty",
                self.index,
                message.round.value,
                message.sender,
            )
            return False

        if message.round is Round.ECHO:
            self.received_echoes[message.sender] = message
        else:
            self.received_readys[message.sender] = message
        logger.debug("[%d] accepted %s from %d", self.index, message.round.value, message.sender)
        self._advance()
        return True

    def _handle_batch(self, messages: Iterable[Message]) -> Tuple[bool, ...]:
        messages = tuple(messages)
        for message in messages:
            self._check_message(message)
        if self.state not in _VERIFIED_STATES:
            return tuple(self._handle(message) for message in messages)

        # Verify the first message from each unseen sender in parallel, then
        # apply the results in order on this thread.
        first = {}
        for position, message in enumerate(messages):
            key = (message.round, message.sender)
            if key not in self._seen and key not in first:
                first[key] = position
        positions = tuple(first.values())
        results = dict(
            zip(positions, _VERIFY_POOL.map(self._verify, (messages[p] for p in positions)))
        )
        return tuple(
            self._handle(message, results.get(position))
            for position, message in enumerate(messages)
        )

    def _advance(self) -> None:
        if (
            self.state == NodeState.AWAITING_ECHOES
            and len(self.received_echoes) >= self.threshold
        ):
            self.state = NodeState.AWAITING_READYS
            logger.info(
                "[%d] received %d valid echoes, ready to broadcast",
                self.index,
                len(self.received_echoes),
            )
        if (
            self.state == NodeState.AWAITING_READYS
            and len(self.received_readys) >= self.threshold
        ):
            self.state = NodeState.COMPLETE
            logger.info(
                "[%d] received %d valid readys, share is final",
                self.index,
                len(self.received_readys),
            )
