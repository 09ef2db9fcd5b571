"""Roster value objects returned by the scan parser."""
