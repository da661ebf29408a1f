"""
Discord cogs for the event logger.

- **event_log_cmds.py**: ``/logevent`` and the modal submission that posts the log
- **admin_cmds.py**: ``/setlogchannel``, ``/addeventtype`` and ``/removeeventtype``
- **events_listener.py**: ready handling, command registration and command errors
"""
