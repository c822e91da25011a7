"""
An in-memory AVSS session: one dealer and n nodes exchanging messages through
direct method calls.

The session stands in for the transport. It delivers each node's Echoes and
Readys to their receivers in one batch per receiver, optionally passing every
message through a tamper function first so tests and the command line can
model a faulty sender.
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Tuple, TypeVar
from .dealer import Dealer
from .errors import NotEnoughSharesError
from .group import GroupParameters, SECP256K1
from .messages import Dealing, Echo, Ready
from .node import Node, NodeState
from .reconstruction import FinalShare, reconstruct_secret

logger = logging.getLogger(__name__)

M = TypeVar("M", Echo, Ready)


class Session:
    """Class coordinating a dealer and its participants."""

    def __init__(
        self,
        secret: int,
        threshold: int,
        participants: int,
        params: GroupParameters = SECP256K1,
    ):
        self.threshold = threshold
        self.participants = participants
        self.dealer = Dealer(secret, threshold, participants, params)
        self.nodes: Dict[int, Node] = {
            index: Node(index, threshold, participants)
            for index in range(1, participants + 1)
        }

    @property
    def commitment(self):
        return self.dealer.commitment

    def states(self) -> Dict[int, NodeState]:
        return {index: node.state for index, node in self.nodes.items()}

    def faulty(self) -> Dict[int, Tuple[int, ...]]:
        """Senders each node has marked faulty."""
        return {index: tuple(sorted(node.faulty)) for index, node in self.nodes.items()}

    def deal(self, dealings: Optional[Iterable[Dealing]] = None) -> Tuple[int, ...]:
        """
        Deliver and verify a dealing for every node.

        Parameters:
        dealings (Iterable[Dealing], optional): Dealings to deliver instead of
        the dealer's honest ones.

        Returns:
        Tuple[int, ...]: Indexes of the nodes that rejected their dealing.
        """
        if dealings is None:
            dealings = self.dealer.deal_all()

        rejected = []
        for dealing in dealings:
            node = self.nodes[dealing.index]
            node.receive_dealing(dealing)
            if not node.verify_dealing():
                rejected.append(node.index)
        return tuple(rejected)

    def _deliver(
        self,
        messages: Iterable[M],
        handle: Callable[[Node, Tuple[M, ...]], Tuple[bool, ...]],
        tamper: Optional[Callable[[M], M]],
    ) -> None:
        inboxes: Dict[int, list] = {}
        for message in messages:
            if tamper is not None:
                message = tamper(message)
            inboxes.setdefault(message.receiver, []).append(message)
        for receiver, inbox in sorted(inboxes.items()):
            node = self.nodes[receiver]
            if node.state == NodeState.ABORTED:
                continue
            handle(node, tuple(inbox))

    def exchange_echoes(self, tamper: Optional[Callable[[Echo], Echo]] = None) -> None:
        """Send every verified node's Echoes to their receivers."""
        messages = [
            echo
            for node in self.nodes.values()
            if node.state
            in (NodeState.AWAITING_ECHOES, NodeState.AWAITING_READYS, NodeState.COMPLETE)
            for echo in node.echoes()
        ]
        logger.debug("Delivering %d echoes", len(messages))
        self._deliver(messages, Node.handle_echoes, tamper)

    def exchange_readys(self, tamper: Optional[Callable[[Ready], Ready]] = None) -> None:
        """Send Readys from every node that has collected t valid Echoes."""
        messages = [
            ready
            for node in self.nodes.values()
            if node.state in (NodeState.AWAITING_READYS, NodeState.COMPLETE)
            for ready in node.readys()
        ]
        logger.debug("Delivering %d readys", len(messages))
        self._deliver(messages, Node.handle_readys, tamper)

    def run(
        self,
        echo_tamper: Optional[Callable[[Echo], Echo]] = None,
        ready_tamper: Optional[Callable[[Ready], Ready]] = None,
    ) -> Dict[int, NodeState]:
        """Run the dealing, Echo and Ready rounds and return every node's state."""
        self.deal()
        self.exchange_echoes(echo_tamper)
        self.exchange_readys(ready_tamper)
        states = self.states()
        logger.info(
            "Session finished: %d of %d nodes complete",
            sum(1 for state in states.values() if state == NodeState.COMPLETE),
            self.participants,
        )
        return states

    def shares(self) -> Tuple[FinalShare, ...]:
        """Final shares of every completed node, by index."""
        return tuple(
            node.share
            for _, node in sorted(self.nodes.items())
            if node.state == NodeState.COMPLETE
        )

    def reconstruct(self, indexes: Optional[Iterable[int]] = None) -> int:
        """
        Reconstruct the secret from completed nodes' shares.

        Parameters:
        indexes (Iterable[int], optional): Restrict reconstruction to these
        participants. Defaults to every completed node.

        Raises:
        NotEnoughSharesError: If too few completed shares are available.
        """
        shares = self.shares()
        if indexes is not None:
            wanted = set(indexes)
            missing = wanted - {share.index for share in shares}
            if missing:
                raise NotEnoughSharesError(
                    f"Participants {sorted(missing)} have not completed."
                )
            shares = tuple(share for share in shares if share.index in wanted)
        return reconstruct_secret(self.commitment, shares, self.threshold)
