#!/usr/bin/env python3
"""
Seed demo staff users, organizations, customer users and a sub-customer.

Every demo account uses the password from SEED_PASSWORD (default "password").
Run from project root after scripts/create_tables.py: python scripts/seed_demo_data.py
"""

import sys
import os

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# Load .env file
from dotenv import load_dotenv
load_dotenv(os.path.join(project_root, ".env"))

from src.auth.passwords import hash_password
from src.db import supabase

STAFF_USERS = [
    ("admin001@admin.com", "Alex Scalia", "Administrator"),
    ("admin002@admin.com", "Sarah Johnson", "Support Agent"),
    ("admin003@admin.com", "Michael Chen", "Support Agent"),
    ("admin004@admin.com", "Emma Rodriguez", "Administrator"),
    ("admin005@admin.com", "David Thompson", "Support Agent"),
]

ORGANIZATIONS = [
    ("Acme Corporation", "Acme Corp", "enterprise"),
    ("Tech Startup Inc", "TechStartup", "pro"),
]

CUSTOMER_USERS = [
    ("john@acmecorp.com", "John Smith", "Acme Corporation", "Owner"),
    ("jane@acmecorp.com", "Jane Doe", "Acme Corporation", "Editor"),
    ("bob@acmecorp.com", "Bob Wilson", "Acme Corporation", "Viewer"),
    ("alice@techstartup.com", "Alice Johnson", "Tech Startup Inc", "Owner"),
    ("mike@techstartup.com", "Mike Davis", "Tech Startup Inc", "Editor"),
]

SUB_CUSTOMERS = [
    ("agency@acmecorp.com", "Acme Agency Partner", "Acme Corporation"),
]


def _role_ids(table: str) -> dict[str, str]:
    result = supabase.table(table).select("id, name").execute()
    return {row["name"]: row["id"] for row in result.data}


def _exists(table: str, email: str) -> bool:
    result = supabase.table(table).select("id").eq("email", email).is_("deleted_at", "null").execute()
    return bool(result.data)


def _organization_id(name: str, company_name: str, plan: str) -> str:
    existing = supabase.table("organizations").select("id").eq("name", name).is_("deleted_at", "null").execute()
    if existing.data:
        return existing.data[0]["id"]
    created = supabase.table("organizations").insert({
        "name": name,
        "company_name": company_name,
        "plan": plan,
    }).execute()
    print(f"Created organization: {company_name} ({plan})")
    return created.data[0]["id"]


def main():
    password_hash = hash_password(os.getenv("SEED_PASSWORD", "password"))

    staff_roles = _role_ids("staff_roles")
    customer_roles = _role_ids("customer_roles")
    if not staff_roles or not customer_roles:
        print("Error: roles missing, run scripts/create_tables.py first")
        sys.exit(1)

    for email, name, role in STAFF_USERS:
        if _exists("staff_users", email):
            print(f"Staff user '{email}' already exists.")
            continue
        supabase.table("staff_users").insert({
            "email": email,
            "name": name,
            "role_id": staff_roles[role],
            "password_hash": password_hash,
        }).execute()
        print(f"Created staff user: {name} ({role})")

    org_ids = {name: _organization_id(name, company, plan) for name, company, plan in ORGANIZATIONS}

    for email, name, org_name, role in CUSTOMER_USERS:
        if _exists("customer_users", email):
            print(f"Customer user '{email}' already exists.")
            continue
        supabase.table("customer_users").insert({
            "email": email,
            "name": name,
            "org_id": org_ids[org_name],
            "role_id": customer_roles[role],
            "password_hash": password_hash,
        }).execute()
        print(f"Created customer user: {name} ({role} at {org_name})")

    for email, name, org_name in SUB_CUSTOMERS:
        if _exists("sub_customers", email):
            print(f"Sub-customer '{email}' already exists.")
            continue
        supabase.table("sub_customers").insert({
            "email": email,
            "name": name,
            "org_id": org_ids[org_name],
            "password_hash": password_hash,
        }).execute()
        print(f"Created sub-customer: {name} ({org_name})")

    print("Done!")


if __name__ == "__main__":
    main()
