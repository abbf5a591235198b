# Supabase tables: meta_credentials, profiles (client database pointer)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

meta_credentials:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null, unique)
- pixel_id: text (not null)
- page_id: text (nullable)
- access_token: text (not null, secret)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Row-level policies: owner only (auth.uid() = user_id) for select, insert,
update and delete.

The client database pointer lives on profiles (client_supabase_url,
client_supabase_key). A user-owned project is expected to hold, created by
hand: meta_credentials, webhook_urls, events.
"""
