#!/usr/bin/env python3
"""
main.py
=======
Entry point.

    python main.py                  # Pygame window (SPACE = request car)
    python main.py --headless 300   # run 300 ticks without a window
    python main.py --api            # REST API on config.API_PORT
"""

import argparse
import logging
import sys

import config
from logging_setup import setup_logging
from valet.policy import PolicyError
from valet.session import ValetSession
from valet.ticker import ManualTicker, ThreadTicker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Intelligent valet exit-gate predictor")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--headless", type=int, metavar="TICKS",
                      help="run TICKS ticks without a window and print the final state")
    mode.add_argument("--api", action="store_true", help="serve the REST API")
    parser.add_argument("--seed", type=int, default=None, help="seed for direction changes")
    parser.add_argument("--host", default=config.API_HOST)
    parser.add_argument("--port", type=int, default=config.API_PORT)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def run_headless(session: ValetSession, ticker: ManualTicker, ticks: int) -> None:
    log = logging.getLogger("main")
    session.start()
    ran = ticker.advance(ticks)
    snap = session.snapshot()
    log.info("ran %d ticks", ran)
    ped = snap.pedestrian
    print(f"position   ({ped.x:.1f}, {ped.y:.1f})  heading {ped.heading_deg:.1f}°")
    for gate in snap.gates:
        print(f"gate {gate.id}     {gate.confidence:>3d}%  {gate.name}")
    if snap.dispatch.active:
        print(f"dispatch   gate {snap.dispatch.gate_id}  ETA {snap.dispatch.eta_s}s")
    else:
        print("dispatch   none")
    for line in snap.log:
        print(line)
    session.stop()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))
    log = logging.getLogger("main")

    try:
        policy = config.policy_from_env()
        seed = args.seed if args.seed is not None else config.seed_from_env()
    except PolicyError as exc:
        log.error("invalid configuration: %s", exc)
        return 2

    if args.headless is not None:
        ticker = ManualTicker()
        run_headless(ValetSession(policy=policy, ticker=ticker, seed=seed), ticker, args.headless)
        return 0

    session = ValetSession(policy=policy, ticker=ThreadTicker(policy.tick_s), seed=seed)
    log.info("Starting valet session (tick %d ms)", policy.tick_interval_ms)
    try:
        if args.api:
            from valet.api import run_api
            run_api(session, host=args.host, port=args.port)
        else:
            from ui.pygame_view import run_pygame_view
            run_pygame_view(session, config.WINDOW_WIDTH, config.WINDOW_HEIGHT, config.TARGET_FPS)
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        session.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
