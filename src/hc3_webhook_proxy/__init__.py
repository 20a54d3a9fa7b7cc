"""Relay SwitchBot webhooks to a Fibaro HC3 QuickApp."""

__version__ = "0.1.0"
