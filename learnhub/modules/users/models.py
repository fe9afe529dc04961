# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- name: text (not null)
- email: text (not null)
- role: text (not null) - values: job_seeker, recruiter
- plan_type: text (nullable) - e.g. free
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A Supabase Auth user without a row here is not an authenticated user of
this API.
"""
