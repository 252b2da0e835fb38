#!/usr/bin/python3
# Copyright Red Hat
#
# difftest.py - simple example driver for pathdiff.diff
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
from argparse import ArgumentParser
import logging
import json
import sys

import pathdiff

from pathdiff.diff import DiffOptions, diff

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _load(path):
    with open(path, "r", encoding="utf8") as fp:
        return json.load(fp)


def main():
    parser = ArgumentParser(prog="difftest.py")
    parser.add_argument(
        "-a",
        "--array-policy",
        dest="array_policy",
        choices=["diff", "atomic", "ignore"],
        default=None,
        help="How to compare arrays",
    )
    parser.add_argument(
        "-e",
        "--array-equality",
        dest="array_equality",
        choices=["reference", "shallow"],
        default=None,
        help="Whole array equality with --array-policy=atomic",
    )
    parser.add_argument(
        "-k",
        "--skip-key",
        type=str,
        action="append",
        metavar="KEY",
        dest="keys_to_skip",
        default=None,
        help="Exclude object KEY from comparison",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="FILE",
        default=None,
        help="Load diff options from FILE",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        default="info",
        help=f"Set log level ({', '.join(LOG_LEVELS.keys())})",
        choices=LOG_LEVELS.keys(),
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable all pathdiff debug subsystems",
    )
    parser.add_argument("diff_from", type=str, help="Previous JSON document")
    parser.add_argument("diff_to", type=str, help="Current JSON document")
    args = parser.parse_args()

    pathdiff_log = logging.getLogger("pathdiff")
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    pathdiff_log.setLevel(LOG_LEVELS[args.log_level])
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(pathdiff.SubsystemFilter())
    pathdiff_log.addHandler(console_handler)
    if args.debug:
        pathdiff.set_debug_mask(pathdiff.PATHDIFF_DEBUG_ALL)

    try:
        if args.config:
            options = DiffOptions.from_file(args.config)
        else:
            options = DiffOptions.from_cmd_args(args)
        previous = _load(args.diff_from)
        current = _load(args.diff_to)
    except (OSError, ValueError, pathdiff.PathdiffError) as err:
        print(f"difftest.py: {err}", file=sys.stderr)
        sys.exit(1)

    try:
        results = diff(previous, current, options)
        print(results.summary())
        if len(results):
            print(results.short())
    except (KeyboardInterrupt, BrokenPipeError):
        # Graceful early exit on user abort or broken pipe
        return


if __name__ == "__main__":
    main()
