"""CampCheck: on-device inventory and packing-list manager for camping gear."""

__version__ = "0.1.0"
