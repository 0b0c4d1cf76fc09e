"""
CareerTrack
A personal career-tracking API: skills, job targets, learning goals and
job applications, each scoped to the signed-in user.

Architecture:
- PostgreSQL: all resources, one owner per row
- JWT session cookie: stateless proof of identity
- Ownership guard: every read/write scoped to the caller
"""

__version__ = "1.0.0"
