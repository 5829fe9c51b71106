# Command-line controller for the SimpleGeo client.
#
# GeoLookupApp holds a Client and runs one lookup per call, always
# returning a result dict (the error slot is filled instead of raising),
# so the CLI only has to print what it gets back.

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

import requests
import yaml
from loguru import logger

from simplegeo_client.client import Client
from simplegeo_client.oauth.request import PLACEMENTS
from simplegeo_client.oauth.errors import SigningError

COMMANDS = ("categories", "feature", "context", "places", "weather")


class GeoLookupApp:
    # High-level controller for command-line lookups.
    #
    # Responsibilities:
    # - Decide which Client method a command + target maps to.
    # - Turn every expected failure into result["error"].

    def __init__(self, client: Client) -> None:
        self.client = client

    # ------------------------------------------------------------------
    # 1. Target parsing
    # ------------------------------------------------------------------
    @staticmethod
    def _is_coord(target: str) -> bool:
        parts = target.split(",")
        if len(parts) != 2:
            return False
        try:
            float(parts[0])
            float(parts[1])
        except ValueError:
            return False
        return True

    @staticmethod
    def _is_ip(target: str) -> bool:
        parts = target.split(".")
        return len(parts) == 4 and all(p.isdigit() and 0 <= int(p) <= 255 for p in parts)

    def _resolve(self, command: str, target: Optional[str]) -> Callable[..., Any]:
        # Returns a callable taking **params for the given command / target.
        if command == "categories":
            return lambda **params: self.client.feature_categories()

        if not target:
            raise ValueError(f"'{command}' needs a target")

        if command == "feature":
            handle = Client.extract_id(target) or target
            return lambda **params: self.client.feature(handle)

        if command == "weather":
            return lambda **params: self.client.weather_address(target)

        if command in ("context", "places"):
            if self._is_coord(target):
                lat, lng = (float(p) for p in target.split(","))
                by_coord = self.client.context_coord if command == "context" else self.client.places_coord
                return lambda **params: by_coord(lat, lng, **params)
            if self._is_ip(target):
                by_ip = self.client.context_ip if command == "context" else self.client.places_ip
                return lambda **params: by_ip(target, **params)
            by_address = self.client.context_address if command == "context" else self.client.places_address
            return lambda **params: by_address(target, **params)

        raise ValueError(f"Unknown command: {command}")

    # ------------------------------------------------------------------
    # 2. Execution API
    # ------------------------------------------------------------------
    def run(self, command: str, target: Optional[str] = None,
            params: Optional[Dict[str, str]] = None) -> dict:
        result = {
            "command": command,
            "target": target,
            "result": None,
            "error": None,
        }

        try:
            call = self._resolve(command, target)
            result["result"] = call(**(params or {}))
        except (SigningError, ValueError, TypeError, requests.RequestException) as e:
            logger.error("{command} {target} failed: {err}", command=command, target=target, err=e)
            result["error"] = str(e)

        return result


# ----------------------------------------------------------------------
# 3. Argument parsing
# ----------------------------------------------------------------------
def _parse_param(text: str) -> tuple:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    name, value = text.split("=", 1)
    return name, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simplegeo",
        description="Query the SimpleGeo API (context, places, features).",
    )
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("target", nargs="?", help="IP, 'lat,lng', address or SG_ handle")
    parser.add_argument("-p", "--param", action="append", type=_parse_param, default=[],
                        metavar="NAME=VALUE", help="extra query parameter (repeatable)")
    parser.add_argument("-c", "--config", help="YAML config file with the simplegeo section")
    parser.add_argument("--base-url", default=Client.BASE_URL)
    parser.add_argument("--placement", choices=PLACEMENTS, default="header",
                        help="send the OAuth signature as a header or in the query string")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        client = Client.from_config(args.config, base_url=args.base_url, placement=args.placement)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("Could not load configuration: {err}", err=e)
        return 1

    app = GeoLookupApp(client)
    result = app.run(args.command, args.target, dict(args.param))

    print(json.dumps(result, indent=2, default=str))
    return 0 if result["error"] is None else 1
