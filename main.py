#!/usr/bin/env python3
"""
main.py
=======
Starts the signal controller and serves its HTTP API.

Environment overrides (flags win over environment, environment over
:mod:`config`):

``SMARTFLOW_TICK_S``            seconds per timer tick
``SMARTFLOW_HOST``              bind address
``SMARTFLOW_PORT``              bind port
``SMARTFLOW_CLASSIFIER_URL``    classification endpoint
``SMARTFLOW_LOG_LEVEL``         DEBUG, INFO, WARNING …
"""

import argparse
import logging
import os

import uvicorn

import config
from logging_setup import setup_logging
from control.controller import SignalController
from control.ticker import ThreadTicker
from vision.classifier import HttpClassifier
from web.api import create_app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SmartFlow signal controller")
    parser.add_argument(
        "--tick-seconds", type=float,
        default=float(os.environ.get("SMARTFLOW_TICK_S", config.DEFAULT_TICK_SECONDS)),
    )
    parser.add_argument(
        "--host", default=os.environ.get("SMARTFLOW_HOST", config.DEFAULT_HOST),
    )
    parser.add_argument(
        "--port", type=int,
        default=int(os.environ.get("SMARTFLOW_PORT", config.DEFAULT_PORT)),
    )
    parser.add_argument(
        "--classifier-url",
        default=os.environ.get("SMARTFLOW_CLASSIFIER_URL", config.DEFAULT_CLASSIFIER_URL),
    )
    parser.add_argument(
        "--log-level", default=os.environ.get("SMARTFLOW_LOG_LEVEL", "INFO"),
    )
    parser.add_argument(
        "--autostart", action="store_true",
        help="start the autonomous timer immediately",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(getattr(logging, str(args.log_level).upper(), logging.INFO))
    log = logging.getLogger("main")

    controller = SignalController(ticker=ThreadTicker(period_s=args.tick_seconds))
    classifier = HttpClassifier(
        args.classifier_url, timeout_s=config.DEFAULT_CLASSIFIER_TIMEOUT_S,
    )
    app = create_app(controller, classifier)

    if args.autostart:
        controller.start()

    log.info("Serving SmartFlow API on http://%s:%d", args.host, args.port)
    try:
        uvicorn.run(app, host=args.host, port=args.port)
    finally:
        controller.stop()
        classifier.close()
        log.info("Shutting down...")


if __name__ == "__main__":
    main()
