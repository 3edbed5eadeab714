#!/usr/bin/env python3
"""Create the Ad Ops Portal tables and the provisioning function."""

import os
import psycopg2
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

SQL = """
-- 1. staff_roles
CREATE TABLE IF NOT EXISTS staff_roles (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    name VARCHAR(50) UNIQUE NOT NULL,
    description TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- 2. staff_users
CREATE TABLE IF NOT EXISTS staff_users (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    role_id UUID NOT NULL REFERENCES staff_roles(id),
    email VARCHAR(255) NOT NULL CHECK (email = lower(email)),
    name VARCHAR(255),
    password_hash VARCHAR(255) NOT NULL,
    status VARCHAR(20) NOT NULL DEFAULT 'ACTIVE'
        CHECK (status IN ('ACTIVE', 'INACTIVE', 'SUSPENDED', 'PENDING')),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at TIMESTAMPTZ
);
CREATE UNIQUE INDEX IF NOT EXISTS uq_staff_users_email ON staff_users(email) WHERE deleted_at IS NULL;

-- 3. organizations
CREATE TABLE IF NOT EXISTS organizations (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    name VARCHAR(255) NOT NULL,
    company_name VARCHAR(255) NOT NULL,
    plan VARCHAR(50),
    status VARCHAR(20) NOT NULL DEFAULT 'ACTIVE'
        CHECK (status IN ('ACTIVE', 'INACTIVE', 'SUSPENDED', 'PENDING')),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at TIMESTAMPTZ
);

-- 4. customer_roles
CREATE TABLE IF NOT EXISTS customer_roles (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    name VARCHAR(50) UNIQUE NOT NULL,
    description TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- 5. customer_users
CREATE TABLE IF NOT EXISTS customer_users (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    org_id UUID NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
    role_id UUID NOT NULL REFERENCES customer_roles(id),
    email VARCHAR(255) NOT NULL CHECK (email = lower(email)),
    name VARCHAR(255),
    password_hash VARCHAR(255) NOT NULL,
    status VARCHAR(20) NOT NULL DEFAULT 'ACTIVE'
        CHECK (status IN ('ACTIVE', 'INACTIVE', 'SUSPENDED', 'PENDING')),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at TIMESTAMPTZ
);
CREATE UNIQUE INDEX IF NOT EXISTS uq_customer_users_email ON customer_users(email) WHERE deleted_at IS NULL;
CREATE INDEX IF NOT EXISTS idx_customer_users_org_id ON customer_users(org_id);

-- 6. sub_customers
CREATE TABLE IF NOT EXISTS sub_customers (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    org_id UUID NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
    email VARCHAR(255) NOT NULL CHECK (email = lower(email)),
    name VARCHAR(255),
    password_hash VARCHAR(255) NOT NULL,
    status VARCHAR(20) NOT NULL DEFAULT 'ACTIVE'
        CHECK (status IN ('ACTIVE', 'INACTIVE', 'SUSPENDED', 'PENDING')),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at TIMESTAMPTZ
);
CREATE UNIQUE INDEX IF NOT EXISTS uq_sub_customers_email ON sub_customers(email) WHERE deleted_at IS NULL;
CREATE INDEX IF NOT EXISTS idx_sub_customers_org_id ON sub_customers(org_id);

-- 7. connected_ad_accounts
CREATE TABLE IF NOT EXISTS connected_ad_accounts (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    org_id UUID NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
    platform VARCHAR(20) NOT NULL CHECK (platform IN ('meta', 'google_ads', 'ga4', 'tiktok')),
    account_id VARCHAR(255) NOT NULL,
    account_name VARCHAR(255) NOT NULL,
    access_token TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at TIMESTAMPTZ
);
CREATE UNIQUE INDEX IF NOT EXISTS uq_connected_ad_accounts_platform_account
    ON connected_ad_accounts(org_id, platform, account_id) WHERE deleted_at IS NULL;
"""

# A function body runs in one transaction: a failed owner insert rolls back the organization.
PROVISION_FUNCTION = """
CREATE OR REPLACE FUNCTION provision_organization(
    p_name TEXT,
    p_company_name TEXT,
    p_plan TEXT,
    p_owner_name TEXT,
    p_owner_email TEXT,
    p_owner_password_hash TEXT
) RETURNS JSONB
LANGUAGE plpgsql
AS $$
DECLARE
    v_owner_role_id UUID;
    v_org organizations%ROWTYPE;
    v_owner customer_users%ROWTYPE;
BEGIN
    SELECT id INTO v_owner_role_id FROM customer_roles WHERE name = 'Owner';
    IF v_owner_role_id IS NULL THEN
        RAISE EXCEPTION 'customer role "Owner" has not been seeded';
    END IF;

    INSERT INTO organizations (name, company_name, plan)
    VALUES (p_name, p_company_name, p_plan)
    RETURNING * INTO v_org;

    INSERT INTO customer_users (org_id, role_id, email, name, password_hash)
    VALUES (v_org.id, v_owner_role_id, lower(p_owner_email), p_owner_name, p_owner_password_hash)
    RETURNING * INTO v_owner;

    RETURN jsonb_build_object(
        'organization', to_jsonb(v_org) - 'deleted_at',
        'owner', (to_jsonb(v_owner) - 'password_hash' - 'role_id' - 'deleted_at')
            || jsonb_build_object('role', 'Owner')
    );
END;
$$;
"""

SEED_ROLES = """
INSERT INTO staff_roles (name, description) VALUES
    ('Administrator', 'Full system access and user management'),
    ('Support Agent', 'Customer support and basic system access')
ON CONFLICT (name) DO NOTHING;

INSERT INTO customer_roles (name, description) VALUES
    ('Owner', 'Full access to the organization and can manage other users'),
    ('Editor', 'Can manage campaigns and view reports'),
    ('Viewer', 'Read-only access to campaigns and reports')
ON CONFLICT (name) DO NOTHING;
"""

def main():
    print("Connecting to database...")
    conn = psycopg2.connect(DATABASE_URL)
    conn.autocommit = True
    cur = conn.cursor()

    print("Creating tables...")
    cur.execute(SQL)

    print("Creating provision_organization()...")
    cur.execute(PROVISION_FUNCTION)

    print("Seeding roles...")
    cur.execute(SEED_ROLES)

    cur.execute("SELECT table_name FROM information_schema.tables WHERE table_schema = 'public' ORDER BY table_name;")
    tables = cur.fetchall()
    print(f"\nTables created: {[t[0] for t in tables]}")

    cur.execute("SELECT name FROM staff_roles UNION ALL SELECT name FROM customer_roles;")
    roles = cur.fetchall()
    print(f"Roles: {[r[0] for r in roles]}")

    cur.close()
    conn.close()
    print("\nDone!")

if __name__ == "__main__":
    main()
