"""
Event Logger - Discord bot for proof-backed event logs

Members run ``/logevent`` with an event type and an image attachment, fill in
the host username and event time in a modal, and the bot posts the result as
an embed to the configured log channel.

Core Components:

- **Event Config**: log channel id and event type list, persisted to JSON after
  every admin change
- **Pending Submissions**: per-user table bridging ``/logevent`` and its modal
- **Cogs**: the submission flow, admin commands and lifecycle handlers
- **Embeds**: rendering of submitted logs

Usage:
    from eventlog.main import main
    main()
"""
