from .event_log import Event, EventLog

__all__ = ["Event", "EventLog"]
