"""
Domain layer containing core business logic and domain services.

Submodules:
- live: Channel access and cloud recording.
- user: OAuth users and their login sessions.
"""
