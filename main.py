#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
#
# Copyright (c) 2025-2026 AudioXRef Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
AudioXRef - Audio device enumeration and browser device cross-referencing

Command line entry point.
"""

import argparse
import json
import sys
import traceback

from config import get_display_version
from config.app_config import ConfigManager
from config.constants import VALID_DIRECTIONS
from core.devices.manager import DeviceCrossReferenceManager
from core.devices.report import (
    devices_to_json,
    low_confidence_matches,
    render_device_list,
    render_match_report,
    report_to_json,
)
from engines.enumeration.snapshots import load_foreign_devices, load_native_devices
from utils.error_handler import AudioXRefError, ErrorHandler
from utils.logger import setup_logging

# Global logger for exception hook
_logger = None

# MediaDeviceInfo.kind for each native direction
_FOREIGN_KINDS = {
    "output": ("audiooutput",),
    "input": ("audioinput",),
    "all": ("audioinput", "audiooutput"),
}


def exception_hook(exctype, value, tb):
    """
    Global exception handler for uncaught exceptions.

    Logs the error when logging is up, otherwise prints the traceback.
    """
    error_msg = "".join(traceback.format_exception(exctype, value, tb))

    if _logger:
        _logger.critical(
            f"Uncaught exception: {exctype.__name__}: {value}",
            exc_info=(exctype, value, tb),
        )
    else:
        print(f"CRITICAL ERROR: {error_msg}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="audioxref",
        description="Enumerate host audio devices and cross-reference them "
        "with a browser enumerateDevices() list",
    )
    parser.add_argument("--version", action="version", version=get_display_version())
    parser.add_argument("--config", help="Path to a user configuration JSON file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--no-log-file", action="store_true", help="Do not write the rotating log file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    devices_parser = subparsers.add_parser("devices", help="List and classify native devices")
    devices_parser.add_argument(
        "--direction", choices=VALID_DIRECTIONS, help="Device direction to enumerate"
    )
    devices_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    match_parser = subparsers.add_parser(
        "match", help="Cross-reference native devices with a browser device list"
    )
    match_parser.add_argument(
        "--foreign", required=True, help="JSON file with enumerateDevices() output"
    )
    match_parser.add_argument(
        "--native", help="JSON file with saved native devices (skips enumeration)"
    )
    match_parser.add_argument(
        "--direction", choices=VALID_DIRECTIONS, help="Device direction to enumerate"
    )
    match_parser.add_argument(
        "--position-correlation",
        action="store_true",
        default=None,
        help="Pair leftover devices by list position as a last resort",
    )
    match_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return parser


def _run_devices(args, manager: DeviceCrossReferenceManager) -> int:
    devices = manager.list_native_devices(args.direction)
    if args.json:
        print(devices_to_json(devices))
    else:
        print(render_device_list(devices, platform=manager.system))
    return 0


def _run_match(args, manager: DeviceCrossReferenceManager) -> int:
    direction = args.direction or manager.direction
    foreign_devices = load_foreign_devices(args.foreign, kind=_FOREIGN_KINDS[direction])
    native_devices = load_native_devices(args.native) if args.native else None

    report = manager.cross_reference(foreign_devices, native_devices, direction=direction)

    review = low_confidence_matches(report)
    if review:
        _logger.warning("%d low-confidence match(es) should be reviewed", len(review))

    if args.json:
        print(report_to_json(report))
    else:
        print(render_match_report(report))
    return 0


def main(argv=None) -> int:
    """Application entry point; returns the process exit code."""
    global _logger

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config_manager = ConfigManager(user_config_path=args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(
        level=args.log_level or config_manager.get("logging.level"),
        file_output=not args.no_log_file and config_manager.get("logging.file_enabled", True),
    )
    _logger = logger
    sys.excepthook = exception_hook

    logger.debug("AudioXRef %s starting: %s", get_display_version(), args.command)

    manager = DeviceCrossReferenceManager(config_manager)
    position_correlation = getattr(args, "position_correlation", None)
    if not manager.initialize(enable_position_correlation=position_correlation):
        print("Error: invalid matching configuration, see the log for details", file=sys.stderr)
        return 1

    try:
        if args.command == "devices":
            return _run_devices(args, manager)
        return _run_match(args, manager)
    except (AudioXRefError, OSError, json.JSONDecodeError) as e:
        error_info = ErrorHandler.handle_error(e, {"command": args.command})
        print(f"Error: {ErrorHandler.format_user_message(error_info)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
