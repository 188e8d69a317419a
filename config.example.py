# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real keys. Use .env (local, gitignored); see .env.example.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "Title shown in the header (default: Task Manager).",
    "TASKBOARD_LOG_LEVEL": "Logging level (default: INFO; stderr never goes below WARNING).",
    # Hosted backend
    "TASKBOARD_SUPABASE_URL": (
        "Supabase project URL (fallbacks: SUPABASE_URL, VITE_SUPABASE_URL)."
    ),
    "TASKBOARD_SUPABASE_ANON_KEY": (
        "Supabase anon key (fallbacks: SUPABASE_ANON_KEY, VITE_SUPABASE_ANON_KEY)."
    ),
    "TASKBOARD_TASKS_TABLE": "Table holding the tasks (default: tasks).",
    "TASKBOARD_REQUEST_TIMEOUT_SECONDS": "Per-request HTTP timeout (default: 15).",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory for the log file (default: .local/taskboard).",
}
