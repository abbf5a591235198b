# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable)
- client_supabase_url: text (nullable)
- client_supabase_key: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
- check: client_supabase_url and client_supabase_key are both null or both set

Row-level policies:
- owner (auth.uid() = id) can select, insert and update
- admins can select all rows (to pick users when assigning webhooks)
- no delete policy; profiles are never hard-deleted
"""
