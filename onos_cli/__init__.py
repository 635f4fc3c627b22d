"""Command lines and printing helpers for the ONOS topology, PCI and UE-NIB services."""

__version__ = "0.1.0"