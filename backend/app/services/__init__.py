"""
Services module - Application business logic layer.

Modules:
- store: Read access to imported activities
- analytics: Statistics over activity snapshots
- recommendation: Weekly training plan scheduler
- export: Calendar export of recommended plans
- stats_service: Orchestration of the above per request
"""
