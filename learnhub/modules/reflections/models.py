# Supabase table: reflections
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- lesson_id: uuid (references lessons.id, not null)
- learner_id: uuid (references users.id, not null)
- learner_name: text (not null) - snapshot of the learner's name
- content: text (not null) - at least 20 characters
- submitted_at: timestamp
- reviewed: boolean (not null, default false)

Only "reviewed" ever changes after insert. The review outcome and its points
live in the progress table (see modules/progress/models.py).
"""
