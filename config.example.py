# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTREE_APP_NAME": "App display name (default: tasktree).",
    "TASKTREE_LOG_LEVEL": "Log file level (default: INFO).",
    # Storage
    "TASKTREE_STORAGE": "Snapshot store: json | sqlite | memory (default: json).",
    "TASKTREE_DATA_DIR": "Local data directory (default: .local/tasktree).",
    "TASKTREE_TASKS_PATH": "JSON snapshot path (default: <data_dir>/tasks.json).",
    "TASKTREE_TASKS_DB_PATH": "SQLite snapshot path (default: <data_dir>/tasks.sqlite3).",
    "TASKTREE_STORAGE_KEY": "Key of the SQLite slot holding the snapshot (default: tasks).",
    # Engine / listing
    "TASKTREE_PAGE_SIZE": "Root tasks per page (default: 20).",
    "TASKTREE_REQUIRE_CHILDREN_DONE": (
        "Refuse to toggle a task whose subtasks are not all DONE (true/false, default: false)."
    ),
}
