# Supabase table: lessons
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- workshop_id: uuid (references workshops.id, not null)
- title: text (not null)
- content: text (nullable) - inline lesson body
- content_uri: text (nullable) - external link to the lesson material
- requires_reflection: boolean (not null, default false)
- order: integer (not null) - 1-based, dense within a workshop
- estimated_duration: integer (not null) - minutes
- created_at: timestamp
- updated_at: timestamp

"order" is maintained by the service, not by a constraint: new lessons are
appended, deletes close the gap and moves swap two neighbours.
"""
