"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskCategory, derived summaries)
- task_registry.py: in-memory authoritative store + lookup/filter/update
- categories.py: per-category counts over the registry
- progress.py: overall progress and per-status counts
- result_merge.py: merges manual/automated results into task state
- result_summary.py: fallback-chain extraction over automated payloads
- task_actions.py: labels and offered workflows for list views
- seed.py: starting task set
"""
