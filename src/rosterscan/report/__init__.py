"""Review report writers for parsed rosters."""

from .txt_writer import LOW_ROOM_COUNT, write_roster_json, write_roster_report

__all__ = ["LOW_ROOM_COUNT", "write_roster_json", "write_roster_report"]
