"""
Placement Portal
Placement cell backend with Listmonk email notifications and an AI mail bot.

Architecture:
- PostgreSQL: Structured records (users, students, companies, drives)
- MongoDB: Notices and events
- Listmonk: Every outgoing email (one /api/tx call per recipient)
- DeepSeek AI: Drafts mail bot announcements only (a human sends them)
"""

__version__ = "1.0.0"
