#!/usr/bin/env python3
"""
Database Setup Script

Creates the PostgreSQL tables from database/schema.sql, the MongoDB
indexes, and optionally a placement cell (admin) login.

Run: python scripts/init_db.py [admin_email admin_password]
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import text

from app.core.auth import hash_password
from app.db.mongodb import init_mongo_indexes
from app.db.postgres import get_db_session, fetch_one


def create_tables():
    print("\n[1] Creating tables...")
    with open('database/schema.sql', 'r') as f:
        schema_sql = f.read()

    with get_db_session() as db:
        db.execute(text(schema_sql))
    print("    ✅ Tables ready")


def create_admin(email: str, password: str):
    print(f"\n[3] Creating admin {email}...")
    if fetch_one("SELECT user_id FROM users WHERE email = :email", {"email": email}):
        print("    ⚠️  Already exists, skipped")
        return

    with get_db_session() as db:
        db.execute(
            text("INSERT INTO users (email, password_hash, role) VALUES (:email, :hash, 'admin')"),
            {"email": email, "hash": hash_password(password)}
        )
    print("    ✅ Admin created")


def main():
    create_tables()

    print("\n[2] Creating MongoDB indexes...")
    init_mongo_indexes()
    print("    ✅ Indexes ready")

    if len(sys.argv) == 3:
        create_admin(sys.argv[1], sys.argv[2])


if __name__ == "__main__":
    main()
