import argparse
import logging
import sys
from .group import SECP256K1
from .messages import Echo
from .node import NodeState
from .session import Session
from .errors import AVSSError

logger = logging.getLogger(__name__)


def parse_tamper(value):
    try:
        sender, receiver = (int(part) for part in value.split(":"))
    except ValueError:
        raise argparse.ArgumentTypeError("Tamper target must look like SENDER:RECEIVER.")
    return sender, receiver


def echo_tamperer(target):
    # Corrupt alpha in the Echo from target[0] to target[1].
    def tamper(echo: Echo) -> Echo:
        if (echo.sender, echo.receiver) != target:
            return echo
        payload = echo.payload
        return Echo(payload._replace(alpha=(payload.alpha + 1) % SECP256K1.order))

    return tamper


def simulate(args):
    secret = int(args.secret, 16) if args.secret else SECP256K1.random_scalar()
    session = Session(secret, args.threshold, args.participants)
    tamper = echo_tamperer(args.tamper) if args.tamper else None
    states = session.run(echo_tamper=tamper)

    faulty = session.faulty()
    for index, state in sorted(states.items()):
        suffix = f" faulty={list(faulty[index])}" if faulty[index] else ""
        print(f"node {index}: {state.value}{suffix}")

    completed = sum(1 for state in states.values() if state == NodeState.COMPLETE)
    try:
        recovered = session.reconstruct()
    except AVSSError as e:
        print(f"reconstruction failed: {e}")
        return 1

    print(f"{completed}/{args.participants} nodes complete")
    print(f"secret recovered: {recovered == secret % SECP256K1.order}")
    return 0 if recovered == secret % SECP256K1.order else 1


def main(argv=None):
    parser = argparse.ArgumentParser(prog="avss")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers()

    parser_simulate = subparsers.add_parser(
        "simulate", help="Run an in-memory sharing session."
    )
    parser_simulate.add_argument(
        "--threshold", type=int, required=True, help="Shares needed to reconstruct."
    )
    parser_simulate.add_argument(
        "--participants", type=int, required=True, help="Number of participants."
    )
    parser_simulate.add_argument("--secret", type=str, help="Secret as hex. Random if omitted.")
    parser_simulate.add_argument(
        "--tamper",
        type=parse_tamper,
        help="Corrupt the Echo from SENDER to RECEIVER, e.g. 2:5.",
    )
    parser_simulate.set_defaults(func=simulate)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except ValueError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
