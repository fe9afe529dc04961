# Supabase table names shared across modules; records in different tables
# reference each other only through these id columns, never by joins.
USERS = "users"
WORKSHOPS = "workshops"
LESSONS = "lessons"
REGISTRATIONS = "registrations"
REFLECTIONS = "reflections"
PROGRESS = "progress"
