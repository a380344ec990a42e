"""Database schema definitions for the local SQLite vault."""

from __future__ import annotations

# Tasks table - templates, instances and one-off tasks share one table
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    is_completed BOOLEAN DEFAULT 0,
    due_date DATETIME,
    section_id TEXT,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    completed_at DATETIME,

    -- Email linkage
    email_id TEXT,
    email_subject TEXT,
    email_sender TEXT,
    gmail_url TEXT,

    -- Financial
    amount REAL,

    -- Recurrence rule (weekdays: JSON list of Sunday-first codes)
    recurrence_pattern TEXT NOT NULL DEFAULT 'never',
    recurrence_interval INTEGER NOT NULL DEFAULT 1,
    recurrence_weekdays TEXT NOT NULL DEFAULT '',
    recurrence_end_type TEXT NOT NULL DEFAULT 'never',
    recurrence_end_count INTEGER,
    recurrence_end_date DATETIME,
    current_recurrence_count INTEGER NOT NULL DEFAULT 0,
    generated_through DATETIME,

    -- Instance linkage
    is_recurring_instance BOOLEAN DEFAULT 0,
    parent_recurring_task_id TEXT,
    recurring_instance_date DATETIME,

    FOREIGN KEY (parent_recurring_task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(is_completed)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_parent ON tasks(parent_recurring_task_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_recurring ON tasks(is_recurring_instance, recurrence_pattern)",
]

ALL_INDEXES = CREATE_TASK_INDEXES
