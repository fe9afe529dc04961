# Supabase table: progress
# This file documents the expected database schema
# Actual operations are handled via the DocumentStore in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- lesson_id: uuid (not null)
- learner_id: uuid (not null)
- reflection_id: uuid (not null) - the reflection this record scores
- reflection_status: text (not null) - values: pending, approved, rejected
- points: integer (not null, default 0) - 0 pending, +50 approved, -30 rejected
- reviewed_by: text (not null, default '') - reviewer uid, empty until reviewed
- reviewed_at: timestamp (nullable)
- created_at: timestamp

One record per reflection, matched by reflection_id. A learner's total is the
sum of points over all of their records, computed on demand.
"""
