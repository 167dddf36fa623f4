"""
Live channel domain logic.

Includes:
- channel: Channel creation, joining, sharing and the passphrase directory.
- recording: Cloud recording state machine and orchestrator.
"""
