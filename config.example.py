# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "REMEDY_APP_NAME": "App display name (default: remedy-desk).",
    "REMEDY_LOG_LEVEL": "Console logging level (default: INFO).",
    "REMEDY_DATA_DIR": "Local data directory (default: .local/remedy_desk).",
    "REMEDY_LOG_FILE": "Log file path (default: <REMEDY_DATA_DIR>/remedy_desk.log).",
    # Tasks
    "REMEDY_SEED_ENABLED": "Start with the built-in seed task set (true/false, default: true).",
    "REMEDY_AGENT_LABEL": "Assignee written by automated processing (default: AI Agent).",
    "REMEDY_AGENT_DELAY_SECONDS": "Simulated processing time of the offline agent (default: 0.5).",
}
