"""HomeKit accessory for Sonoff TH10/TH16 relays running Tasmota firmware."""
