# Supabase Auth
# Identity is delegated to Supabase's built-in authentication system.
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Sign-in and session tokens
# - JWT validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the user behind a JWT
- auth.sign_out() - Logout users

The app-side mirror of a user is the `profiles` row (see modules/profiles),
created on first sign-in.
"""
