# Supabase table: registrations
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key) - derived from (workshop_id, learner_id), see service.registration_key
- workshop_id: uuid (references workshops.id, not null)
- learner_id: uuid (references users.id, not null)
- learner_name: text (not null) - snapshot of the learner's name at registration time
- registered_at: timestamp

At most one registration exists per (workshop_id, learner_id). Rows created
before the derived id was introduced are still found by the equality lookup.
"""
