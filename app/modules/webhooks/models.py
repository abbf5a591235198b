# Supabase table: webhook_urls
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

webhook_urls:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null, unique - one webhook per user)
- webhook_url: text (not null)
- created_by_admin: boolean (default: false)
- created_at: timestamp (default: now())

Row-level policies:
- select: owner (auth.uid() = user_id) or has_role(auth.uid(), 'admin')
- insert/update/delete: has_role(auth.uid(), 'admin')
"""
