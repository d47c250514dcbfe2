"""Humidity-triggered appliance control with Nature Remo and Google Sheets."""
