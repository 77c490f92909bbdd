from .timestamp import parse_timestamp, start_of_day, end_of_day, to_storage, from_storage

__all__ = ["parse_timestamp", "start_of_day", "end_of_day", "to_storage", "from_storage"]
