# Supabase table: workshops
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- title: text (not null)
- description: text (not null)
- creator_id: uuid (references users.id, not null) - the recruiter who owns it
- schedule: jsonb (not null) - {"start_date": timestamp, "end_date": timestamp | null, "is_open": bool}
- skills_addressed: jsonb (not null, default '[]') - ordered list of strings
- difficulty: text (not null) - values: beginner, intermediate, advanced
- created_at: timestamp
- updated_at: timestamp

A workshop owns its lessons: deleting it deletes every lesson with a
matching workshop_id (and their reflections and progress) plus its
registrations.
"""
