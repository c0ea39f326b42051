"""Start TH10 switch accessories from a config file.

A single configured device is published as a standalone accessory;
several are published behind a `Bridge`.

    python -m th10switch -c config.json
"""
import argparse
import logging
import signal
import sys

from pyhap.accessory import Bridge
from pyhap.accessory_driver import AccessoryDriver

from th10switch.accessory import TH10Switch
from th10switch.config import ConfigError, load_config_file
from th10switch.const import DEFAULT_PERSIST_FILE, DEFAULT_PORT, __version__

logger = logging.getLogger("th10switch")


def get_accessory(driver, configs):
    """Return a standalone accessory, or a bridge if there are several."""
    if len(configs) == 1:
        return TH10Switch.from_config(driver, configs[0])

    bridge = Bridge(driver, "TH10 Bridge")
    for config in configs:
        bridge.add_accessory(TH10Switch.from_config(driver, config))
    return bridge


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="th10switch",
        description="Expose Sonoff TH10/TH16 relays to HomeKit.",
    )
    parser.add_argument(
        "-c", "--config", required=True, help="JSON file with the accessory config(s)"
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="HAP server port")
    parser.add_argument(
        "--persist-file",
        default=DEFAULT_PERSIST_FILE,
        help="File storing pairing information",
    )
    parser.add_argument("--pincode", help="Setup code, formatted xxx-xx-xxx")
    parser.add_argument("--address", help="Local address to listen on")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        configs = load_config_file(args.config)
    except (OSError, ConfigError) as err:
        logger.error("Could not load config: %s", err)
        return 1

    driver = AccessoryDriver(
        port=args.port,
        persist_file=args.persist_file,
        pincode=args.pincode.encode("ascii") if args.pincode else None,
        address=args.address,
    )
    driver.add_accessory(accessory=get_accessory(driver, configs))

    # We want SIGTERM (kill) to be handled by the driver itself,
    # so that it can gracefully stop the accessory, server and advertising.
    signal.signal(signal.SIGTERM, driver.signal_handler)
    driver.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
