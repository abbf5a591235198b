# Supabase table: user_roles, function: has_role
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase structure:

app_role: enum ('admin', 'user')

user_roles:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null, on delete cascade)
- role: app_role (not null)
- created_at: timestamp (default: now())
- unique constraint on (user_id, role)

has_role(_user_id uuid, _role app_role) -> boolean
- SECURITY DEFINER, so it reads user_roles regardless of the caller's own
  row-level restrictions (no recursive policy evaluation)

Row-level policies:
- users can select their own rows
- admins (has_role(auth.uid(), 'admin')) can select all rows
- no insert/update/delete policies; provisioning is out of band
"""
