"""Tests for the th10switch command line."""
import json
import signal
from unittest.mock import patch

from pyhap.accessory import Bridge

from th10switch import __main__ as cli
from th10switch.accessory import TH10Switch
from th10switch.config import Config


def test_get_accessory_standalone(mock_driver):
    acc = cli.get_accessory(mock_driver, [Config(ip_address="10.0.0.7", name="Fridge")])
    assert isinstance(acc, TH10Switch)
    assert acc.display_name == "Fridge"


def test_get_accessory_bridge(mock_driver):
    configs = [
        Config(ip_address="10.0.0.7", name="Fridge"),
        Config(ip_address="10.0.0.8", name="Freezer"),
    ]
    bridge = cli.get_accessory(mock_driver, configs)
    assert isinstance(bridge, Bridge)
    assert sorted(acc.display_name for acc in bridge.accessories.values()) == [
        "Freezer",
        "Fridge",
    ]


def test_parse_args():
    args = cli.parse_args(["-c", "config.json"])
    assert args.config == "config.json"
    assert args.port == 51826
    assert args.persist_file == "th10switch.state"
    assert args.pincode is None
    assert args.verbose is False


def test_main_bad_config(tmp_path):
    with patch.object(cli, "AccessoryDriver") as driver_cls:
        assert cli.main(["-c", str(tmp_path / "missing.json")]) == 1
    driver_cls.assert_not_called()


def test_main(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"th10IpAddress": "10.0.0.7", "name": "Fridge"}))

    with patch.object(cli, "AccessoryDriver") as driver_cls, patch.object(
        cli, "get_accessory"
    ) as get_accessory, patch.object(cli.signal, "signal") as mock_signal:
        assert cli.main(["-c", str(path), "--port", "51999", "--pincode", "123-45-678"]) == 0

    driver_cls.assert_called_once_with(
        port=51999, persist_file="th10switch.state", pincode=b"123-45-678", address=None
    )
    driver = driver_cls.return_value
    configs = get_accessory.call_args[0][1]
    assert [c.name for c in configs] == ["Fridge"]
    driver.add_accessory.assert_called_once_with(accessory=get_accessory.return_value)
    mock_signal.assert_called_once_with(signal.SIGTERM, driver.signal_handler)
    driver.start.assert_called_once_with()
