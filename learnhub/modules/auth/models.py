# Supabase Auth
# This module consumes Supabase's built-in authentication system.
# Sign-up, sign-in, sign-out and token refresh happen against Supabase Auth
# directly from the client; this API only resolves a bearer token.

"""
Supabase Auth provides:
- auth.get_user(jwt) - Resolve the uid behind an access token

The uid is then joined with the users table (see modules/users/models.py)
to obtain the caller's role, name, email and plan.
"""
